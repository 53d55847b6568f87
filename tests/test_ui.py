from fincontrol.ui import FinControlUI


def test_obligations_frame(ledger, profiles):
    frame = FinControlUI().obligations_frame(ledger, profiles)
    rows = {row['Descrição']: row for row in frame.to_dict('records')}
    assert set(rows) == {'Conta e1', 'Conta e2', 'Conta d1'}
    assert rows['Conta e2']['Restante (%)'] == 'PAGO'
    assert rows['Conta d1']['Parcela'] == '2/10'
    assert rows['Conta d1']['Saldo Restante'] == 'R$ 2.400,00'
    assert rows['Conta d1']['Prioridade'] == 'Crítica'
    assert rows['Conta e1']['Vencimento'] == '10/02/24'


def test_incomes_frame(ledger, profiles):
    frame = FinControlUI().incomes_frame(ledger, profiles)
    assert list(frame['Descrição']) == ['Renda i2', 'Renda i1']
    assert list(frame['Tipo']) == ['Variável', 'Fixa (Mensal)']
    assert list(frame['Perfil']) == ['Loja', 'João']
