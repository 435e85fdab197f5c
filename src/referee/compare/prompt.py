"""Prompt construction for neutral comparisons.

The prompt is the only place neutrality is enforced: the model is told to
weigh every option against every constraint, never to name a winner, and to
answer with one JSON object in a fixed shape. The normalizer checks that shape
but not the tone.
"""

from __future__ import annotations

from typing import Sequence

OUTPUT_SCHEMA_EXAMPLE = """{
  "options": [
    {
      "name": "option name",
      "pros": ["pro 1", "pro 2"],
      "cons": ["con 1", "con 2"],
      "scores": {
        "constraint name": "rating/explanation"
      }
    }
  ],
  "tradeOffs": [
    {
      "scenario": "If you prioritize ...",
      "recommendation": "Consider ... because ..."
    }
  ]
}"""


def _numbered(items: Sequence[str]) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1))


def build_prompt(options: Sequence[str], constraints: Sequence[str]) -> str:
    """Build the comparison prompt for `options` judged against `constraints`.

    Options and constraints are listed in input order with 1-based numbers.
    Empty sequences yield a degenerate prompt rather than an error; callers
    validate input first.
    """

    return f"""You are a neutral technical referee. Compare the following options without declaring a winner.

OPTIONS TO COMPARE:
{_numbered(options)}

CONSTRAINTS TO EVALUATE:
{_numbered(constraints)}

INSTRUCTIONS:
1. Evaluate EVERY option against EVERY constraint listed above
2. List specific pros and cons for each option
3. DO NOT declare a "best" or "winner" - remain completely neutral
4. Provide trade-off scenarios in the form: "If you prioritize X, consider Y because..."
5. Be factual and balanced in your analysis
6. Score each option against each constraint with a brief explanation

OUTPUT FORMAT (a single JSON object with exactly this structure):
{OUTPUT_SCHEMA_EXAMPLE}

IMPORTANT:
- Respond with ONLY the JSON object: no prose before or after it, no markdown code fences
- Include every option provided, using its name exactly as given
- Use the constraint names exactly as given as the keys of "scores"
- Trade-offs must describe balanced scenarios, never a single overall recommendation"""
