# src/ingestion/narrative.py
"""Prompt construction for turning raw customer data into behavior text.

The generated narrative is treated as ordinary behavior history afterwards;
it is written to sit far apart in embedding space for opposite risk profiles.
"""

from __future__ import annotations

import json
from typing import Any

from creditai.llm.models import Message

DEFAULT_NARRATIVE_INSTRUCTION = """\
You are a senior credit risk analyst specialized in behavior scoring.
Your task is to turn raw customer data (JSON) into a concise "financial DNA" profile.

ANALYSIS RULES:
1. IDENTIFY the pattern: is the customer Stable, Fluctuating or Insolvent?
2. ANALYZE the triggers:
   - Gambling merchant codes (MCC 7995) or bounced checks = Critical risk. Use words such as "insolvency", "loss of control" and "unreliability".
   - Variable revenue or sole-proprietor income = Moderate risk. Use words such as "entrepreneur", "irregular cash flow" and "seasonality".
   - Fixed salary or pension = Low risk. Use words such as "maximum predictability", "security" and "conservative".

CONSTRAINTS:
- Do not use generic phrases such as "interesting profile".
- Be direct: at most 2 sentences (about 30 words).
- Focus on semantic distance: stable profiles must read as the opposite of risky ones.

EXPECTED OUTPUT:
A narrative summary describing the essence of the customer's financial behavior, for vector search.
Answer with plain text only."""


def serialize_raw_data(raw_data: Any) -> str:
    """Render raw customer data as JSON text (strings are passed through)."""
    if isinstance(raw_data, str):
        return raw_data
    return json.dumps(raw_data, ensure_ascii=False, default=str, sort_keys=True)


def build_narrative_messages(raw_data: Any) -> list[Message]:
    """User message carrying the raw customer data."""
    return [
        Message(
            role="user",
            content=f"Customer data:\n{serialize_raw_data(raw_data)}",
        )
    ]
