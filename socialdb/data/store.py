"""Access to the C{main} store."""

from zope.component import getUtility

from storm.zope.interfaces import IZStorm


def getMainStore():
    """Get the C{Store} for the C{main} database in the current thread.

    Stores are managed by the C{ZStorm} utility registered by
    L{socialdb.application.setupStore} and join the current C{transaction}.

    @return: A C{Store} instance for the C{main} database.
    """
    return getUtility(IZStorm).get('main')
