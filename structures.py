"""
Buffer Structures for QueueCalc
Linked FIFO queue and LIFO stack used to hold operands and pending operators.

Reads from an empty structure return None instead of raising, so callers can
test for the empty case without try/except.
"""


class Node:
    """Single link in a Queue chain"""
    __slots__ = ("data", "next")

    def __init__(self, data):
        self.data = data
        self.next = None


class Queue:
    """
    Singly linked FIFO queue.

    Operations: enqueue, dequeue, peek, is_empty, length, clear.
    Time: O(1) for all of them.
    """

    def __init__(self):
        self._front = None
        self._back = None
        self._size = 0

    def enqueue(self, value):
        """Append a value to the back of the queue"""
        node = Node(value)
        if self._size == 0:
            self._front = node
        else:
            self._back.next = node
        self._back = node
        self._size += 1

    def dequeue(self):
        """Remove and return the oldest value, or None if empty"""
        if self._size == 0:
            return None
        node = self._front
        self._front = node.next
        node.next = None
        self._size -= 1
        if self._size == 0:
            self._back = None
        return node.data

    def peek(self):
        """Return the oldest value without removing it, or None if empty"""
        if self._size == 0:
            return None
        return self._front.data

    def is_empty(self):
        return self._size == 0

    def length(self):
        return self._size

    def clear(self):
        """Drop all values"""
        self._front = None
        self._back = None
        self._size = 0

    def contents(self):
        """Space separated values front to back, for logging"""
        if self._size == 0:
            return "The queue is empty."
        return " ".join(str(value) for value in self)

    def __iter__(self):
        current = self._front
        while current is not None:
            yield current.data
            current = current.next

    def __len__(self):
        return self._size

    def __repr__(self):
        return f"Queue([{', '.join(repr(value) for value in self)}])"


class Stack:
    """
    List-backed LIFO stack.

    reverse() flips the stack in place so the bottom value is popped first;
    pushing operands in encounter order and reversing lets order-sensitive
    operators consume them left to right.
    """

    def __init__(self):
        self._items = []

    def push(self, value):
        self._items.append(value)

    def pop(self):
        """Remove and return the top value, or None if empty"""
        if not self._items:
            return None
        return self._items.pop()

    def peek(self):
        """Return the top value without removing it, or None if empty"""
        if not self._items:
            return None
        return self._items[-1]

    def is_empty(self):
        return not self._items

    def length(self):
        return len(self._items)

    def clear(self):
        self._items.clear()

    def reverse(self):
        self._items.reverse()

    def contents(self):
        """Space separated values bottom to top, for logging"""
        if not self._items:
            return "The stack is empty."
        return " ".join(str(value) for value in self._items)

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return f"Stack({self._items!r})"
