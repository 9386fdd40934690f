from dataclasses import dataclass, field
from typing import Sequence

from nethermind.calltrace.types import CallRecord


@dataclass
class CallNode:
    """Contract call with the calls it made"""

    record: CallRecord
    children: list["CallNode"] = field(default_factory=list)

    def walk(self):
        """Yields this node and all of its descendants in trace order"""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


def build_call_tree(records: Sequence[CallRecord]) -> list[CallNode]:
    """
    Rebuilds the nesting of calls from the depth of each record.  A record is attached to the closest
    preceding record with a smaller depth, or returned as a root if there is none.  Records are not
    modified, and depth jumps of more than one level are attached to the closest shallower call.

    :param records: Call records in trace order
    :return: list of root :class:`CallNode`
    """
    roots: list[CallNode] = []
    stack: list[CallNode] = []

    for record in records:
        node = CallNode(record)
        while stack and stack[-1].record.depth >= record.depth:
            stack.pop()

        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)

    return roots
