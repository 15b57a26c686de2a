class UnknownEntityError(Exception):
    """Raised when an attempt to use an unknown L{Entity} is made.

    @param guids: A sequence of unknown L{Entity.guid}s.
    """

    def __init__(self, guids):
        self.guids = list(guids)

    def __str__(self):
        if len(self.guids) == 1:
            return 'Unknown entity %r.' % self.guids[0]
        guids = ','.join(repr(guid) for guid in self.guids)
        return 'Unknown entities: %s.' % guids
