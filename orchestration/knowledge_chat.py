"""
Knowledge chat orchestration.

Runs every knowledge pool through its budget, ORs the truncation flags
into one ``context_truncated`` signal and builds the system prompt in a
fixed section order: skills -> customers -> documents -> urls ->
user instructions.

Document fetching and the LLM completion are injected callables; this
module does no I/O of its own.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from context import (
    Summarizer,
    build_system_prompt,
    estimate_tokens,
    get_base_prompt,
    prepare_customer_context,
    prepare_pool,
    summarize,
    to_context_items,
)
from monitoring import ContextAuditLogger
from scoring import Scorer, keyword_overlap_score
from shared.config import Settings, get_settings
from shared.models import Category, ContextItem, PoolContext
from shared.schemas import (
    CompletionRequest,
    KnowledgeChatRequest,
    KnowledgeChatResponse,
    KnowledgeDocument,
    ReferenceUrl,
    TransparencyInfo,
    UsedItem,
)

logger = logging.getLogger(__name__)

DocumentFetcher = Callable[[List[str]], Sequence[KnowledgeDocument]]
CompletionFn = Callable[[CompletionRequest], str]
TokenCounter = Callable[[str], int]

POOL_ORDER = ("skills", "customers", "documents", "urls")


@dataclass
class AssembledChatContext:
    """System prompt plus everything needed to explain how it was built."""

    system_prompt: str
    base_system_prompt: str
    context_truncated: bool
    pools: Dict[str, PoolContext] = field(default_factory=dict)
    model: str = ""
    max_tokens: int = 0
    temperature: float = 0.0
    token_counter: TokenCounter = estimate_tokens

    def used(self, pool: str) -> List[UsedItem]:
        return [UsedItem(id=u.id, title=u.title) for u in self.pools[pool].used_items]

    def transparency(self) -> TransparencyInfo:
        estimated = {name: self.token_counter(pool.text) for name, pool in self.pools.items()}
        estimated["system_prompt"] = self.token_counter(self.system_prompt)
        return TransparencyInfo(
            system_prompt=self.system_prompt,
            base_system_prompt=self.base_system_prompt,
            knowledge_context=self.pools["skills"].text,
            customer_context=self.pools["customers"].text,
            document_context=self.pools["documents"].text,
            url_context=self.pools["urls"].text,
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            estimated_tokens=estimated,
        )


def url_items(reference_urls: Sequence[ReferenceUrl]) -> List[ContextItem]:
    """URLs carry only a synthetic ``URL: ...`` body; title falls back to the URL."""
    return [
        ContextItem(
            id=ref.id,
            title=ref.title or ref.url,
            content=f"URL: {ref.url}",
            category=Category.URL,
        )
        for ref in reference_urls
    ]


def select_documents(
    documents: Sequence[KnowledgeDocument],
    document_ids: Sequence[str],
) -> List[KnowledgeDocument]:
    """Requested documents that have text content, in fetch order."""
    wanted = set(document_ids)
    return [
        doc for doc in documents
        if doc.id in wanted and doc.content and doc.content.strip()
    ]


class KnowledgeChatService:
    """
    Assemble budgeted context and answer knowledge chat requests.

    Usage:
        service = KnowledgeChatService(
            document_fetcher=repo.get_documents,
            complete_fn=llm.complete,
        )
        response = service.answer(request)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        scorer: Scorer = keyword_overlap_score,
        summarizer: Summarizer = summarize,
        document_fetcher: Optional[DocumentFetcher] = None,
        complete_fn: Optional[CompletionFn] = None,
        audit_logger: Optional[ContextAuditLogger] = None,
        token_counter: TokenCounter = estimate_tokens,
    ):
        self.settings = settings or get_settings()
        self.scorer = scorer
        self.summarizer = summarizer
        self.document_fetcher = document_fetcher
        self.complete_fn = complete_fn
        self.audit_logger = audit_logger or ContextAuditLogger(self.settings.AUDIT_LOG_FILE)
        self.token_counter = token_counter

    def _prepare(self, pool: str, query: str, items: Sequence[ContextItem], category: Category) -> PoolContext:
        config = self.settings.get_pool(pool)
        return prepare_pool(
            query,
            items,
            category,
            config.budget,
            config.tiers,
            scorer=self.scorer,
            summarizer=self.summarizer,
            summary_length=self.settings.summary.summary_length,
            min_snippet_chars=self.settings.summary.min_snippet_chars,
        )

    def _fetch_documents(self, document_ids: List[str]) -> List[KnowledgeDocument]:
        if not document_ids:
            return []
        if self.document_fetcher is None:
            raise RuntimeError("Documents were requested but no document_fetcher is configured")
        return select_documents(self.document_fetcher(document_ids), document_ids)

    def assemble_context(self, request: KnowledgeChatRequest) -> AssembledChatContext:
        """
        Build the system prompt for a request.

        Args:
            request: Chat request with all knowledge pools

        Returns:
            AssembledChatContext with the aggregated truncation flag
        """
        query = request.message
        documents = self._fetch_documents(request.document_ids)

        pools = {
            "skills": self._prepare(
                "skills", query, to_context_items(request.skills, Category.SKILL), Category.SKILL
            ),
            "customers": prepare_customer_context(
                request.customer_profiles, self.settings.get_pool("customers").budget
            ),
            "documents": self._prepare(
                "documents", query, to_context_items(documents, Category.DOCUMENT), Category.DOCUMENT
            ),
            "urls": self._prepare(
                "urls", query, url_items(request.reference_urls), Category.URL
            ),
        }

        system_prompt = build_system_prompt(
            skills_context=pools["skills"].text,
            customer_context=pools["customers"].text,
            document_context=pools["documents"].text,
            url_context=pools["urls"].text,
            user_instructions=request.user_instructions,
            call_mode=request.call_mode,
        )
        context_truncated = any(pools[name].truncated for name in POOL_ORDER)

        llm = self.settings.llm
        assembled = AssembledChatContext(
            system_prompt=system_prompt,
            base_system_prompt=get_base_prompt(request.call_mode),
            context_truncated=context_truncated,
            pools=pools,
            model=llm.quick_model if request.quick_mode else llm.model,
            max_tokens=llm.call_max_tokens if request.call_mode else llm.max_tokens,
            temperature=llm.call_temperature if request.call_mode else llm.temperature,
            token_counter=self.token_counter,
        )

        self.audit_logger.log_assembly(query, pools, context_truncated, len(system_prompt))
        return assembled

    def build_completion_request(
        self,
        request: KnowledgeChatRequest,
        assembled: AssembledChatContext,
    ) -> CompletionRequest:
        """Conversation history followed by the current message."""
        messages = [
            {"role": m.role, "content": m.content} for m in request.conversation_history
        ]
        messages.append({"role": "user", "content": request.message})
        return CompletionRequest(
            model=assembled.model,
            system=assembled.system_prompt,
            messages=messages,
            max_tokens=assembled.max_tokens,
            temperature=assembled.temperature,
        )

    def answer(self, request: KnowledgeChatRequest) -> KnowledgeChatResponse:
        """
        Assemble context, call the LLM and report provenance.

        Errors raised by the document fetcher or the completion function
        propagate unchanged.
        """
        if self.complete_fn is None:
            raise RuntimeError("No complete_fn configured")

        assembled = self.assemble_context(request)
        completion = self.build_completion_request(request, assembled)

        response_text = self.complete_fn(completion) or "No response generated"

        logger.info(
            f"Knowledge chat answered with model={assembled.model}, "
            f"context_truncated={assembled.context_truncated}"
        )

        return KnowledgeChatResponse(
            response=response_text,
            skills_used=assembled.used("skills"),
            customers_used=assembled.used("customers"),
            documents_used=assembled.used("documents"),
            urls_used=assembled.used("urls"),
            context_truncated=assembled.context_truncated,
            transparency=assembled.transparency(),
        )
