"""
Orchestration Module.

Per-request pipeline over all knowledge pools:
- skills, documents, URLs: rank -> tier -> pack -> render
- customer profiles: compose -> boundary truncate
- aggregate truncation flags, build the system prompt

Usage:
    from orchestration import KnowledgeChatService

    service = KnowledgeChatService(document_fetcher=fetch, complete_fn=complete)
    assembled = service.assemble_context(request)
"""

from .knowledge_chat import (
    AssembledChatContext,
    CompletionFn,
    DocumentFetcher,
    KnowledgeChatService,
    select_documents,
    url_items,
)

__all__ = [
    "AssembledChatContext",
    "CompletionFn",
    "DocumentFetcher",
    "KnowledgeChatService",
    "select_documents",
    "url_items",
]
