"""Narrative financial report generated with Gemini."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

import google.generativeai as genai

try:
    from . import config
    from .formatting import profile_name
    from .models import LedgerTransaction, Profile
except ImportError:
    import config
    from formatting import profile_name
    from models import LedgerTransaction, Profile

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = (
    'Chave de API não configurada. Por favor, configure a API Key para usar a IA.'
)
UNAVAILABLE_MESSAGE = 'Não foi possível gerar a análise no momento.'

PROMPT_TEMPLATE = """Atue como um consultor financeiro sênior. Analise os seguintes dados financeiros (em formato JSON) e forneça um relatório conciso em HTML (sem markdown, apenas tags como <p>, <strong>, <ul>, <li>).

Foque em:
1. Saúde financeira geral.
2. Alertas sobre dívidas de alta prioridade.
3. Oportunidades de corte de gastos.
4. Sugestão para alocação de recursos.

Dados: {data}"""


def build_digest(transactions: Iterable[LedgerTransaction], profiles: Iterable[Profile]) -> Dict[str, Any]:
    """The compact view of the ledger sent to the model."""
    profiles = list(profiles)
    transactions = list(transactions)
    summary: List[Dict[str, Any]] = []
    for txn in transactions:
        summary.append({
            'type': txn.type.value,
            'value': txn.value,
            'category': txn.category,
            'name': txn.name,
            'profile': profile_name(profiles, txn.profile_id),
            'priority': txn.priority.value if txn.is_obligation else None,
        })
    return {
        'profiles': [profile.name for profile in profiles],
        'totalTransactions': len(transactions),
        'summary': summary,
    }


def build_prompt(transactions: Iterable[LedgerTransaction], profiles: Iterable[Profile]) -> str:
    digest = build_digest(transactions, profiles)
    return PROMPT_TEMPLATE.format(data=json.dumps(digest, ensure_ascii=False))


def summarize(
    transactions: Iterable[LedgerTransaction],
    profiles: Iterable[Profile],
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> str:
    """Ask Gemini for an HTML report; always returns displayable text."""
    api_key = api_key or config.GOOGLE_API_KEY
    if not api_key:
        return MISSING_KEY_MESSAGE

    prompt = build_prompt(transactions, profiles)
    try:
        genai.configure(api_key=api_key)
        model_instance = genai.GenerativeModel(model_name=model or config.GEMINI_MODEL)
        response = model_instance.generate_content(prompt)
        if not response.parts:
            logger.warning("Gemini returned an empty or blocked response")
            return UNAVAILABLE_MESSAGE
        return response.text.strip()
    except Exception:
        logger.exception("Gemini request failed")
        return UNAVAILABLE_MESSAGE
