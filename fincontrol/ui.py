"""Streamlit UI components for FinControl.

Rendering only: every number shown here comes from the pure functions in
``aggregation``, ``payments``, ``schedule`` and ``goals``.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

import pandas as pd
import streamlit as st

try:
    from . import visualization as viz
    from .aggregation import compute_monthly_trend, compute_priority_totals, compute_totals
    from .formatting import (
        FREQUENCY_LABELS, PRIORITY_LABELS, PROFILE_TYPE_LABELS, TYPE_LABELS,
        due_status_label, format_currency, format_date, payment_status_label, profile_name,
    )
    from .goals import compute_goal_percentage, compute_goal_projection
    from .models import (
        Frequency, Goal, LedgerTransaction, Priority, Profile, ProfileType, TransactionType,
    )
    from .payments import compute_payment_progress
    from .schedule import compute_recent, compute_upcoming
except ImportError:
    import visualization as viz
    from aggregation import compute_monthly_trend, compute_priority_totals, compute_totals
    from formatting import (
        FREQUENCY_LABELS, PRIORITY_LABELS, PROFILE_TYPE_LABELS, TYPE_LABELS,
        due_status_label, format_currency, format_date, payment_status_label, profile_name,
    )
    from goals import compute_goal_percentage, compute_goal_projection
    from models import (
        Frequency, Goal, LedgerTransaction, Priority, Profile, ProfileType, TransactionType,
    )
    from payments import compute_payment_progress
    from schedule import compute_recent, compute_upcoming


class FinControlUI:
    """UI building blocks shared by the dashboard pages."""

    # Dashboard --------------------------------------------------------------

    def render_stat_cards(self, transactions: List[LedgerTransaction]) -> None:
        totals = compute_totals(transactions)
        col1, col2, col3, col4 = st.columns(4)
        col1.metric("Rendas Totais", format_currency(totals['income']))
        col2.metric("Despesas", format_currency(totals['expense']))
        col3.metric("Dívidas Ativas", format_currency(totals['debt']))
        col4.metric(
            "Saldo Líquido",
            format_currency(totals['balance']),
            help="Rendas menos despesas e o valor total das dívidas",
        )

    def render_charts(self, transactions: List[LedgerTransaction]) -> None:
        col1, col2 = st.columns([2, 1])
        with col1:
            st.plotly_chart(viz.create_monthly_trend_chart(compute_monthly_trend(transactions)), use_container_width=True)
        with col2:
            priority_totals = compute_priority_totals(transactions)
            st.plotly_chart(viz.create_priority_donut(priority_totals), use_container_width=True)
            st.caption(f"Total comprometido: {format_currency(float(priority_totals.sum()))}")

    def render_recent(self, transactions: List[LedgerTransaction], profiles: List[Profile], limit: int) -> None:
        st.subheader("🕒 Atividade Recente")
        recent = compute_recent(transactions, limit)
        if not recent:
            st.info("Nenhum lançamento registrado.")
            return
        for txn in recent:
            sign = '+' if txn.type is TransactionType.INCOME else '-'
            col_a, col_b = st.columns([3, 1])
            col_a.markdown(
                f"**{txn.name}**  \n{profile_name(profiles, txn.profile_id)} · {format_date(txn.date)}"
            )
            col_b.markdown(f"{sign} {format_currency(txn.value)}")

    def render_upcoming(self, transactions: List[LedgerTransaction], limit: Optional[int]) -> None:
        st.subheader("📅 Próximos Vencimentos")
        upcoming = compute_upcoming(transactions, limit)
        if not upcoming:
            st.success("Nenhuma conta pendente com vencimento.")
            return
        for item in upcoming:
            col_a, col_b, col_c = st.columns([3, 1, 1])
            col_a.markdown(f"**{item.transaction.name}**  \n{format_date(item.due_date)}")
            col_b.markdown(format_currency(item.remaining_value))
            col_c.markdown(due_status_label(item.status))

    # Transactions -----------------------------------------------------------

    def incomes_frame(self, transactions: List[LedgerTransaction], profiles: List[Profile]) -> pd.DataFrame:
        rows = [
            {
                'Data': format_date(txn.date),
                'Descrição': txn.name,
                'Perfil': profile_name(profiles, txn.profile_id),
                'Categoria': txn.category,
                'Tipo': 'Fixa (Mensal)' if txn.is_fixed_income else 'Variável',
                'Observações': txn.notes or '-',
                'Valor': format_currency(txn.value),
            }
            for txn in compute_recent(transactions, None)
            if txn.type is TransactionType.INCOME
        ]
        return pd.DataFrame(rows)

    def obligations_frame(self, transactions: List[LedgerTransaction], profiles: List[Profile]) -> pd.DataFrame:
        rows = []
        for txn in compute_recent(transactions, None):
            if not txn.is_obligation:
                continue
            progress = compute_payment_progress(txn)
            rows.append({
                'Vencimento': format_date(txn.due_date or txn.date, compact=True),
                'Descrição': txn.name,
                'Tipo': TYPE_LABELS[txn.type],
                'Parcela': progress.installment_label or '-',
                'Restante (%)': 'PAGO' if progress.is_fully_paid else f"{progress.remaining_percentage:g}%",
                'Perfil': profile_name(profiles, txn.profile_id),
                'Categoria': txn.category,
                'Frequência': FREQUENCY_LABELS[txn.frequency],
                'Prioridade': PRIORITY_LABELS[txn.priority],
                'Valor Parcela': format_currency(txn.installment_value) if txn.installment_value else '-',
                'Saldo Restante': format_currency(progress.remaining_value),
                'Valor Total': format_currency(txn.value),
            })
        return pd.DataFrame(rows)

    def render_transaction_details(self, txn: LedgerTransaction, profiles: List[Profile]) -> None:
        st.markdown(f"### {txn.name}")
        st.caption(TYPE_LABELS[txn.type])
        col1, col2 = st.columns(2)
        col1.metric("Valor Total", format_currency(txn.value))
        col1.markdown(f"**Data Registro:** {format_date(txn.date)}")
        col1.markdown(f"**Categoria:** {txn.category}")
        col1.markdown(f"**Perfil:** {profile_name(profiles, txn.profile_id)}")
        if txn.is_obligation:
            progress = compute_payment_progress(txn)
            col2.metric("Valor Pago", format_currency(progress.amount_paid))
            col2.markdown(f"**Vencimento:** {format_date(txn.due_date)}")
            if txn.number_of_installments:
                installments = f"{txn.number_of_installments}x de {format_currency(txn.installment_value or 0)}"
            else:
                installments = 'À vista / Única'
            col2.markdown(f"**Parcelas:** {installments}")
            col2.markdown(f"**Prioridade:** {PRIORITY_LABELS[txn.priority]}")
            st.markdown(f"**Progresso Pagamento:** {payment_status_label(progress.remaining_percentage)}")
            st.progress(int(progress.paid_percentage))
        st.markdown(f"**Observações:** {txn.notes or 'Nenhuma observação registrada para este lançamento.'}")

    def render_transaction_form(self, profiles: List[Profile], kind: TransactionType) -> Optional[Dict]:
        """Collect form values; returns the raw dict on submit."""
        with st.form(f"transaction_form_{kind.value}", clear_on_submit=True):
            profile_ids = [profile.id for profile in profiles]
            profile_id = st.selectbox(
                "Perfil",
                options=profile_ids,
                format_func=lambda pid: profile_name(profiles, pid),
            )
            name = st.text_input("Descrição")
            value = st.number_input("Valor Total (R$)", min_value=0.0, step=10.0, format="%.2f")
            category = st.text_input("Categoria", placeholder="Geral")
            txn_date = st.date_input("Data", value=date.today())
            values: Dict = {
                'type': kind.value,
                'profile_id': profile_id,
                'name': name,
                'value': value,
                'category': category,
                'date': txn_date,
            }
            if kind is TransactionType.INCOME:
                values['is_fixed_income'] = st.checkbox("Renda fixa (mensal)")
            else:
                col1, col2 = st.columns(2)
                values['frequency'] = col1.selectbox(
                    "Frequência", options=list(Frequency), index=1,
                    format_func=lambda item: FREQUENCY_LABELS[item],
                )
                values['priority'] = col2.selectbox(
                    "Prioridade", options=list(Priority), index=1,
                    format_func=lambda item: PRIORITY_LABELS[item],
                )
                values['due_date'] = col1.date_input("Vencimento", value=None)
                values['number_of_installments'] = col2.number_input("Nº de parcelas", min_value=0, step=1)
                values['installment_value'] = col1.number_input(
                    "Valor da parcela (R$)", min_value=0.0, step=10.0, format="%.2f",
                    help="Deixe em branco para calcular pelo total e número de parcelas",
                )
                values['amount_paid'] = col2.number_input(
                    "Valor já pago (R$)", min_value=0.0, step=10.0, format="%.2f",
                    help="Quando informado, define o percentual restante",
                )
                values['remaining_percentage'] = st.slider("Restante a pagar (%)", 0, 100, 100)
            values['notes'] = st.text_area("Observações")
            submitted = st.form_submit_button("Salvar")
        return values if submitted else None

    def render_payment_update_form(self, txn: LedgerTransaction) -> Optional[Dict]:
        progress = compute_payment_progress(txn)
        with st.form(f"payment_update_{txn.id}"):
            amount_paid = st.number_input(
                "Valor pago até agora (R$)", min_value=0.0, value=float(progress.amount_paid), format="%.2f",
            )
            submitted = st.form_submit_button("Atualizar pagamento")
        return {'amount_paid': amount_paid} if submitted else None

    # Profiles ---------------------------------------------------------------

    def render_profile_form(self) -> Optional[Dict]:
        with st.form("profile_form", clear_on_submit=True):
            name = st.text_input("Nome")
            profile_type = st.selectbox(
                "Tipo", options=list(ProfileType), format_func=lambda item: PROFILE_TYPE_LABELS[item],
            )
            bank_account = st.text_input("Conta bancária", placeholder="Ex.: Nubank")
            submitted = st.form_submit_button("Criar perfil")
        if not submitted:
            return None
        return {'name': name, 'type': profile_type.value, 'bank_account': bank_account}

    # Goals ------------------------------------------------------------------

    def render_simulator(self, target_amount: float, current_saved: float, monthly_contribution: float) -> None:
        projection = compute_goal_projection(target_amount, current_saved, monthly_contribution)
        if not projection.is_computable:
            st.warning("Informe um aporte mensal maior que zero para simular.")
            return
        st.metric("Tempo estimado", f"{projection.months_to_goal} meses")
        if projection.show_years:
            st.caption(f"Aproximadamente {projection.years_to_goal:.1f} anos")
        st.progress(int(projection.progress_percentage))
        st.caption(f"Progresso atual: {projection.progress_percentage:.1f}%")

    def render_goal_card(self, goal: Goal) -> None:
        percentage = compute_goal_percentage(goal)
        st.markdown(f"**{goal.name}**")
        st.progress(int(percentage))
        st.caption(
            f"{format_currency(goal.current_amount)} de {format_currency(goal.target_amount)} "
            f"({percentage:.0f}%) · Alvo: {format_date(goal.deadline)}"
        )

    def render_goal_form(self) -> Optional[Dict]:
        with st.form("goal_form", clear_on_submit=True):
            name = st.text_input("Nome da meta")
            target_amount = st.number_input("Valor alvo (R$)", min_value=0.0, step=100.0, format="%.2f")
            current_amount = st.number_input("Valor atual (R$)", min_value=0.0, step=100.0, format="%.2f")
            deadline = st.date_input("Prazo", value=None)
            submitted = st.form_submit_button("Criar meta")
        if not submitted:
            return None
        return {
            'name': name,
            'target_amount': target_amount,
            'current_amount': current_amount,
            'deadline': deadline,
        }
