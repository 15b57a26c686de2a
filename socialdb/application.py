"""Logic needed to bootstrap SocialDB."""

from configparser import RawConfigParser
from logging import getLogger, Formatter, StreamHandler, INFO
from logging.handlers import WatchedFileHandler
import os

from redis import ConnectionPool
from storm.zope.interfaces import IZStorm
from storm.zope.zstorm import ZStorm
import transaction
from zope.component import getUtility, provideUtility


__all__ = ['getConfig', 'setConfig', 'setupConfig', 'setupLogging',
           'setupStore', 'setupCache', 'setupTransact', 'verifyStore']


_config = None


def getConfig():
    """Get the configuration.

    @return: A configuration instance or C{None} if one hasn't been
        registered.
    """
    return _config


def setConfig(config):
    """Set the configuration.

    @param: A configuration instance.
    """
    global _config
    _config = config


_cacheConnectionPool = None


def getCacheConnectionPool():
    """Get a Redis connection pool.

    @return: A L{redis.ConnectionPool} object or None if one hasn't been
        registered.
    """
    return _cacheConnectionPool


def setCacheConnectionPool(connectionPool):
    """Set the Redis connection pool.

    @param: A L{redis.ConnectionPool} object.
    """
    global _cacheConnectionPool
    _cacheConnectionPool = connectionPool


def getDevelopmentMode():
    """Get the development mode flag.

    @return: C{True} if development mode is enabled, otherwise C{False}.
    """
    config = getConfig()
    return config.getboolean('service', 'development')


def setupConfig(path, development=None):
    """Load a configuration.

    The following fields are expected to be in the configuration file in the
    C{service} section:

      * max-threads - The maximum number of database threads to use.

    A special C{development} field will be added to the C{service} section of
    the configuration.  It has a C{True} string value in development mode,
    otherwise it has a C{False} value.

    The following fields are expected to be in the configuration file in the
    C{store} section:

      * main-uri - The Storm-compatible URI to the main database.

    The following fields are expected to be in the configuration file in the
    C{cache} section:

      * host - The host name of the Redis server.
      * port - The port of the Redis server.
      * db - The Redis database number to use.
      * expire-timeout - The number of seconds cached values live for.

    Field values are always strings.

    @param path: Optionally, the location of the configuration file to load.
        Default values will be used if a path isn't provided.
    @param development: Optionally, a boolean flag to indicate whether
        development mode should be enabled.
    @return: A configuration instance.
    """
    config = RawConfigParser()
    if path:
        with open(path, 'r') as configFile:
            config.read_file(configFile)
    else:
        config.add_section('service')
        config.set('service', 'max-threads', '1')

        config.add_section('store')
        config.set('store', 'main-uri',
                   'sqlite:%s' % getBranchPath('var/socialdb.db'))

        config.add_section('cache')
        config.set('cache', 'host', '127.0.0.1')
        config.set('cache', 'port', '6379')
        config.set('cache', 'db', '0')
        config.set('cache', 'expire-timeout', '3600')

    if development is None:
        development = False
    config.set('service', 'development', str(development))
    return config


def getBranchPath(path):
    """Get a path rooted in the current branch.

    @param path: A path relative to the current branch.
    @return: A fully-qualified path.
    """
    currentPath = os.path.dirname(__file__)
    fullyQualifiedPath = os.path.join(currentPath, '..', path)
    return os.path.abspath(fullyQualifiedPath)


def setupCache(config):
    """Setup the Redis Cache

    A new L{redis.ConnectionPool} is created using the values defined in the
    configuration, and then registered with L{setCacheConnectionPool}

    @param config: a configuration instance.
    @return a L{redis.ConnectionPool}.
    """
    host = config.get('cache', 'host')
    port = config.getint('cache', 'port')
    db = config.getint('cache', 'db')
    connectionPool = ConnectionPool(host=host, port=port, db=db,
                                    decode_responses=True)
    setCacheConnectionPool(connectionPool)
    return connectionPool


def setupLogging(stream=None, path=None, level=None, format=None):
    """Setup logging.

    Either a stream or a path can be provided.  When a path is provided a log
    handler that works correctly with C{logrotate} is used.  Generally
    speaking, C{stream} should only be used for non-file streams that don't
    need log rotation.

    @param stream: The stream to write output to.
    @param path: The path to write output to.
    @param level: Optionally, the log level to set on the logger.  Default is
        C{logging.INFO}.
    @param format: A format string for the logger.
    @raise RuntimeError: Raised if neither C{stream} nor C{path} are provided,
        or if both are provided.
    @return: The configured logger, ready to use.
    """
    if (not stream and not path) or (stream and path):
        raise RuntimeError('A stream or path must be provided.')
    if stream:
        handler = StreamHandler(stream)
    else:
        handler = WatchedFileHandler(path)

    if format is None:
        format = '%(asctime)s %(levelname)8s  %(message)s'

    formatter = Formatter(format)
    handler.setFormatter(formatter)
    log = getLogger()
    log.addHandler(handler)
    log.propagate = False
    log.setLevel(level or INFO)
    return log


def setupStore(config):
    """Setup the main store.

    A C{ZStorm} instance is configured and registered as a global utility.

    @param config: A configuration instance.
    @return: A configured C{ZStorm} instance.
    """
    zstorm = ZStorm()
    provideUtility(zstorm)
    uri = config.get('store', 'main-uri')
    zstorm.set_default_uri('main', uri)
    return zstorm


def verifyStore():
    """Ensure that the patch level in the database matches the application.

    @raise RuntimeError: Raised if there are unknown or unapplied patches.
    """
    from socialdb.schema import main
    from socialdb.scripts.schema import getPatchStatus

    zstorm = getUtility(IZStorm)
    store = zstorm.get('main')
    try:
        status = getPatchStatus(store, main)
        if status.unappliedPatches:
            patches = ', '.join('patch_%d' % version
                                for version in status.unappliedPatches)
            raise RuntimeError('Database has unapplied patches: %s' % patches)
        if status.unknownPatches:
            patches = ', '.join('patch_%d' % version
                                for version in status.unknownPatches)
            raise RuntimeError('Database has unknown patches: %s' % patches)
    finally:
        transaction.abort()
        zstorm.remove(store)
        store.close()


def setupTransact(config):
    """Get the L{Transact} instance to run database transactions with.

    A thread pool sized by the C{max-threads} option is started and stopped
    along with the reactor.

    @param config: A configuration instance.
    @return: A L{Transact} instance.
    """
    from twisted.internet import reactor
    from twisted.python.threadpool import ThreadPool

    from socialdb.util.transact import Transact

    maxThreads = config.getint('service', 'max-threads')
    threadPool = ThreadPool(minthreads=0, maxthreads=maxThreads)
    reactor.callWhenRunning(threadPool.start)
    reactor.addSystemEventTrigger('during', 'shutdown', threadPool.stop)
    return Transact(threadPool)
