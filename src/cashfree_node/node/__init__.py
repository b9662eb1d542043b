from .executor import CashfreeNode, NodeItem, Operation

__all__ = ["CashfreeNode", "NodeItem", "Operation"]
