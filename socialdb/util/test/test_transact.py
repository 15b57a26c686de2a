from storm.exceptions import DisconnectionError, OperationalError
import transaction
from twisted.internet.defer import inlineCallbacks

from socialdb.testing.basic import SocialDBTestCase
from socialdb.testing.doubles import FakeThreadPool, FakeTransactionManager
from socialdb.testing.resources import LoggingResource
from socialdb.util.transact import MAX_RETRIES, Transact


class TransactTest(SocialDBTestCase):

    resources = [('log', LoggingResource(format='%(message)s'))]

    def setUp(self):
        super(TransactTest, self).setUp()
        self.manager = FakeTransactionManager()
        self.sleeps = []
        self.transact = Transact(FakeThreadPool(), self.manager,
                                 self.sleeps.append)

    @inlineCallbacks
    def testRun(self):
        """
        L{Transact.run} executes a function in a thread, commits the
        transaction and returns a C{Deferred} that fires with the function's
        result.
        """

        def function(a, b=None):
            return a + b

        result = yield self.transact.run(function, 1, b=2)
        self.assertEqual(3, result)
        self.assertEqual(1, self.manager.commits)
        self.assertEqual(0, self.manager.aborts)

    @inlineCallbacks
    def testRetriesOperationalErrors(self):
        """
        L{Transact.run} retries the transaction if the database is locked or
        otherwise unavailable, and writes a warning in the logs.
        """
        calls = []

        def function():
            calls.append(None)
            if len(calls) == 1:
                raise OperationalError('database is locked')
            return 'success'

        result = yield self.transact.run(function)
        self.assertEqual('success', result)
        self.assertEqual(1, self.manager.aborts)
        self.assertEqual(1, self.manager.commits)
        self.assertEqual(1, len(self.sleeps))
        self.assertIn('Retrying transaction', self.log.getvalue())
        self.assertIn('database is locked', self.log.getvalue())

    @inlineCallbacks
    def testRetriesDisconnectionErrors(self):
        """
        L{Transact.run} retries the transaction if a L{DisconnectionError}
        occurs during a transaction.
        """
        calls = []

        def function():
            calls.append(None)
            if len(calls) == 1:
                raise DisconnectionError('Disconnected')
            return 'success'

        result = yield self.transact.run(function)
        self.assertEqual('success', result)
        self.assertEqual(2, len(calls))
        self.assertEqual(1, self.manager.aborts)

    @inlineCallbacks
    def testRetriesAreLimited(self):
        """
        L{Transact.run} gives up and re-raises the error after
        L{MAX_RETRIES} retries.
        """
        calls = []

        def function():
            calls.append(None)
            raise OperationalError('database is locked')

        yield self.assertFailure(self.transact.run(function),
                                 OperationalError)
        self.assertEqual(MAX_RETRIES + 1, len(calls))
        self.assertEqual(MAX_RETRIES + 1, self.manager.aborts)
        self.assertEqual(0, self.manager.commits)

    @inlineCallbacks
    def testRunWithFunctionFailure(self):
        """
        If the given function raises an error, then L{Transact.run} aborts
        the transaction and re-raises the same error without retrying.
        """
        calls = []

        def function():
            calls.append(None)
            raise RuntimeError('Function call exploded!')

        yield self.assertFailure(self.transact.run(function), RuntimeError)
        self.assertEqual(1, len(calls))
        self.assertEqual(1, self.manager.aborts)

    @inlineCallbacks
    def testRunWithCommitFailure(self):
        """
        If the specified function succeeds but the transaction fails to
        commit, then L{Transact.run} aborts the transaction and re-raises the
        commit exception.
        """

        class BrokenTransactionManager(FakeTransactionManager):

            def commit(self):
                raise RuntimeError('Commit exploded!')

        manager = BrokenTransactionManager()
        transact = Transact(FakeThreadPool(), manager)
        yield self.assertFailure(transact.run(lambda: None), RuntimeError)
        self.assertEqual(1, manager.aborts)

    @inlineCallbacks
    def testReturnStormObject(self):
        """
        A C{RuntimeError} is raised if a Storm object is returned from the
        transaction.  Storm objects may only be used in the thread they were
        created in.
        """

        class StormObject(object):

            __storm_table__ = 'storm_object'

        yield self.assertFailure(self.transact.run(StormObject),
                                 RuntimeError)
        self.assertEqual(1, self.manager.aborts)
        self.assertEqual(0, self.manager.commits)

    def testDefaultTransactionManager(self):
        """
        By default L{Transact} uses the C{transaction} package as the
        transaction manager.
        """
        transact = Transact(FakeThreadPool())
        self.assertIdentical(transaction, transact._transaction)
