"""Redis-backed caching for the model layer.

Cached values are JSON documents stored under a per-class key prefix
followed by an identifier, such as C{private-settings:42} for the private
settings of the entity with GUID C{42}.
"""
import logging

from redis import Redis, RedisError

from socialdb.application import getConfig, getCacheConnectionPool


class CacheResult(object):
    """The outcome of a cache lookup.

    @ivar results: The cached payload, or C{None} on a miss.
    @ivar uncachedValues: The identifiers, usually L{Entity.guid}s, that must
        be fetched from the database.
    """

    def __init__(self, results, uncachedValues):
        self.results = results
        self.uncachedValues = uncachedValues


def getCacheClient():
    """Get a L{Redis} client bound to the process-wide connection pool.

    @raise RuntimeError: Raised if L{setupCache} hasn't configured a
        connection pool.
    """
    connectionPool = getCacheConnectionPool()
    if connectionPool is None:
        raise RuntimeError('ConnectionPool is not configured')
    return Redis(connection_pool=connectionPool)


class BaseCache(object):
    """Store and fetch per-entity payloads in Redis.

    Every entry expires after the C{expire-timeout} configured in the
    C{cache} section.  Redis errors are logged and otherwise ignored: reads
    behave as misses and writes are dropped, so the database stays the
    source of truth.

    @cvar keyPrefix: The prefix for the keys written by a subclass, such as
        C{private-settings:}.
    """

    keyPrefix = ''

    def __init__(self):
        self._client = getCacheClient()
        config = getConfig()
        self.expireTimeout = config.getint('cache', 'expire-timeout')

    def _getKey(self, identifier):
        """Get the Redis key for an identifier, usually an L{Entity.guid}."""
        return '%s%s' % (self.keyPrefix, identifier)

    def getValues(self, identifiers):
        """Fetch the payloads for several identifiers with one C{MGET}.

        @param identifiers: A C{list} of identifiers.
        @return: A C{list} with one payload per identifier, C{None} where
            nothing is cached, or C{None} if Redis can't be reached.
        """
        if not identifiers:
            return []
        keys = [self._getKey(identifier) for identifier in identifiers]
        try:
            return self._client.mget(keys)
        except RedisError as error:
            logging.error('Redis error: %s', error)

    def setValues(self, values):
        """Store payloads with the configured expiry in one pipeline.

        @param values: A C{dict} mapping identifiers to payloads.
        """
        pipe = self._client.pipeline()
        for identifier, value in values.items():
            pipe.setex(self._getKey(identifier), self.expireTimeout, value)
        try:
            for result in pipe.execute():
                if isinstance(result, RedisError):
                    raise result
        except RedisError as error:
            logging.error('Redis error: %s', error)

    def deleteValues(self, identifiers):
        """Drop the payloads of several identifiers.

        @param identifiers: A C{list} of identifiers.
        """
        if not identifiers:
            return
        keys = [self._getKey(identifier) for identifier in identifiers]
        try:
            self._client.delete(*keys)
        except RedisError as error:
            logging.error('Redis error: %s', error)
