"""Context assembly — thread and sender history under a token budget."""

from reply_context.context.budget import BudgetResult, apply_token_budget
from reply_context.context.builder import ContextBuilder
from reply_context.context.formatter import format_for_prompt
from reply_context.context.prompts import build_draft_prompt

__all__ = [
    "BudgetResult",
    "apply_token_budget",
    "ContextBuilder",
    "format_for_prompt",
    "build_draft_prompt",
]
