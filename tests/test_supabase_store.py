import pytest

from fincontrol.models import Goal, Profile, transaction_from_record
from fincontrol.storage import StorageError
from fincontrol.storage.supabase_store import SupabaseStore


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.calls = []

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return method

    def execute(self):
        self.client.executed.append((self.table, self.calls))
        if self.client.error:
            raise self.client.error
        return FakeResponse(self.client.responses.get(self.table, []))


class FakeClient:
    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.executed = []

    def table(self, name):
        return FakeQuery(self, name)


def test_list_transactions_orders_by_date_desc():
    client = FakeClient({'transactions': [
        {'id': 't1', 'profile_id': 'p1', 'type': 'EXPENSE', 'name': 'Luz', 'value': 120,
         'date': '2024-01-10', 'priority': 'HIGH', 'created_at': '2024-01-10T10:00:00'},
    ]})
    store = SupabaseStore(client=client)
    (txn,) = store.list_transactions()
    assert txn.name == 'Luz'
    table, calls = client.executed[0]
    assert table == 'transactions'
    assert ('order', ('date',), {'desc': True}) in calls


def test_create_profile_sends_record_with_id():
    client = FakeClient()
    store = SupabaseStore(client=client)
    created = store.create_profile(Profile(id='', name='Loja', bank_account='Inter PJ'))
    assert created.id
    _, calls = client.executed[0]
    name, args, _ = calls[0]
    assert name == 'insert'
    assert args[0]['bank_account'] == 'Inter PJ'
    assert args[0]['id'] == created.id


def test_delete_filters_by_id():
    client = FakeClient()
    SupabaseStore(client=client).delete_goal('g1')
    _, calls = client.executed[0]
    assert [call[0] for call in calls] == ['delete', 'eq']
    assert calls[1][1] == ('id', 'g1')


def test_update_without_matching_row_raises():
    store = SupabaseStore(client=FakeClient({'goals': []}))
    with pytest.raises(StorageError):
        store.update_goal(Goal(id='g1', name='Reserva', target_amount=100))


def test_client_errors_become_storage_errors():
    store = SupabaseStore(client=FakeClient(error=ConnectionError('offline')))
    with pytest.raises(StorageError) as excinfo:
        store.list_profiles()
    assert excinfo.value.operation == 'list_profiles'
    assert 'offline' in str(excinfo.value)


def test_invalid_rows_are_skipped():
    client = FakeClient({'transactions': [
        {'id': 't1', 'profile_id': 'p1', 'type': 'DEBT', 'name': 'Notebook', 'value': 4500,
         'date': '2024-01-10', 'number_of_installments': 2.5},
        {'id': 't2', 'profile_id': 'p1', 'type': 'INCOME', 'name': 'Salário', 'value': 5000,
         'date': '2024-01-05'},
    ]})
    assert [txn.id for txn in SupabaseStore(client=client).list_transactions()] == ['t2']


def test_update_sends_cleared_columns_as_null():
    row = {'id': 't1', 'profile_id': 'p1', 'type': 'EXPENSE', 'name': 'Luz', 'value': 120,
           'date': '2024-01-10', 'due_date': None}
    client = FakeClient({'transactions': [row], 'goals': [{'id': 'g1', 'name': 'Reserva', 'target_amount': 100}]})
    store = SupabaseStore(client=client)

    store.update_transaction(transaction_from_record(row))
    store.update_goal(Goal(id='g1', name='Reserva', target_amount=100, deadline=None))

    (_, txn_calls), (_, goal_calls) = client.executed
    txn_payload = txn_calls[0][1][0]
    goal_payload = goal_calls[0][1][0]
    assert txn_calls[0][0] == 'update'
    assert txn_payload['due_date'] is None
    assert txn_payload['installment_value'] is None
    assert 'id' not in txn_payload
    assert goal_payload['deadline'] is None
