from fincontrol.models import LedgerValidationError
from fincontrol.snapshot import EMPTY_SNAPSHOT, LOAD_ERROR_MESSAGE, load_snapshot, refresh_snapshot
from fincontrol.storage import LedgerStore, StorageError


class MemoryStore(LedgerStore):
    def __init__(self, profiles=None, transactions=None, goals=None, fail=False):
        self.profiles = profiles or []
        self.transactions = transactions or []
        self.goals = goals or []
        self.fail = fail

    def _check(self, operation):
        if self.fail:
            raise StorageError(operation, 'offline')

    def list_profiles(self):
        self._check('list_profiles')
        return list(self.profiles)

    def list_transactions(self):
        self._check('list_transactions')
        return list(self.transactions)

    def list_goals(self):
        self._check('list_goals')
        return list(self.goals)


def test_load_snapshot(profiles, ledger):
    snapshot = load_snapshot(MemoryStore(profiles, ledger))
    assert snapshot.is_loaded
    assert snapshot.profiles == profiles
    assert snapshot.transactions == ledger


def test_failed_refresh_keeps_previous_snapshot(profiles, ledger):
    previous = load_snapshot(MemoryStore(profiles, ledger))
    snapshot, error = refresh_snapshot(MemoryStore(fail=True), previous)
    assert snapshot is previous
    assert error == LOAD_ERROR_MESSAGE


def test_failed_first_load_is_empty():
    snapshot, error = refresh_snapshot(MemoryStore(fail=True))
    assert snapshot is EMPTY_SNAPSHOT
    assert not snapshot.is_loaded
    assert error


def test_successful_refresh_has_no_error(profiles):
    snapshot, error = refresh_snapshot(MemoryStore(profiles))
    assert error is None
    assert snapshot.profiles == profiles


class InvalidRowStore(MemoryStore):
    def list_transactions(self):
        raise LedgerValidationError('number_of_installments must be a positive integer, got 2.5')


def test_validation_error_keeps_previous_snapshot(profiles, ledger):
    previous = load_snapshot(MemoryStore(profiles, ledger))
    snapshot, error = refresh_snapshot(InvalidRowStore(profiles), previous)
    assert snapshot is previous
    assert error == LOAD_ERROR_MESSAGE
