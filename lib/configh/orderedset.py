class OrderedSet:
    """L{OrderedSet} is a sequence of unique values that remembers the order
    they were added in.

    Every value is stored under a key. Plain values added with L{add} are
    their own key, while L{set} stores a value under a separate key so that a
    later L{set} of the same key replaces the value without moving it:

    >>> s = OrderedSet()
    >>> s.add('-I/usr/include')
    True
    >>> s.add('-I/usr/include')
    False
    >>> s.set('FOO', '#define FOO 1')
    >>> s.set('FOO', '#define FOO 2')
    >>> s.values()
    ['-I/usr/include', '#define FOO 2']
    >>> s.position('FOO')
    2

    Positions are 1-based and stay contiguous after a L{remove}.
    """

    def __init__(self, values=()):
        self._keys = []
        self._values = []
        self._positions = {}

        for value in values:
            self.add(value)

    def __len__(self):
        return len(self._keys)

    def __iter__(self):
        return iter(self._values)

    def __contains__(self, key):
        return key in self._positions

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self._values)

    # --------------------------------------------------------------------------

    def add(self, value):
        """Append I{value} unless it is already present. Returns I{True} if
        the value was appended."""
        if value in self._positions:
            return False

        self._append(value, value)
        return True

    def set(self, key, value):
        """Store I{value} under I{key}, replacing the previous value in place
        if the key is already present."""
        try:
            pos = self._positions[key]
        except KeyError:
            self._append(key, value)
        else:
            self._values[pos - 1] = value

    def remove(self, key):
        """Remove the value stored under I{key}. Returns I{False} if there was
        nothing to remove."""
        try:
            pos = self._positions.pop(key)
        except KeyError:
            return False

        del self._keys[pos - 1]
        del self._values[pos - 1]

        # Every entry after the removed one moves up a slot.
        for i in range(pos - 1, len(self._keys)):
            self._positions[self._keys[i]] = i + 1

        return True

    def position(self, key):
        """Return the 1-based position of I{key}, or I{None}."""
        return self._positions.get(key)

    def get(self, key, default=None):
        try:
            return self._values[self._positions[key] - 1]
        except KeyError:
            return default

    def keys(self):
        return list(self._keys)

    def values(self):
        return list(self._values)

    # --------------------------------------------------------------------------

    def _append(self, key, value):
        self._keys.append(key)
        self._values.append(value)
        self._positions[key] = len(self._keys)
