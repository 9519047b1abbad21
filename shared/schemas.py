"""
Pydantic schemas for the knowledge chat request/response models.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class Skill(BaseModel):
    """A curated knowledge snippet."""

    id: str
    title: str
    content: str = ""


class KnowledgeDocument(BaseModel):
    """An uploaded document with its extracted text."""

    id: str
    title: str
    filename: Optional[str] = None
    content: Optional[str] = None


class ReferenceUrl(BaseModel):
    """A saved reference link. Only the URL itself reaches the prompt."""

    id: str
    url: str
    title: Optional[str] = None


class CustomerKeyFact(BaseModel):
    """Legacy label/value fact on a customer profile."""

    label: str
    value: str


class CustomerProfile(BaseModel):
    """Customer profile as far as prompt composition needs it."""

    id: str
    name: str
    industry: Optional[str] = None
    content: Optional[str] = Field(
        default=None, description="Unified markdown content, preferred over legacy fields"
    )
    considerations: List[str] = Field(default_factory=list)

    # Legacy fields
    overview: str = ""
    products: Optional[str] = None
    challenges: Optional[str] = None
    key_facts: List[CustomerKeyFact] = Field(default_factory=list)


class ChatMessage(BaseModel):
    """One turn of conversation history."""

    role: Literal["user", "assistant"]
    content: str


class KnowledgeChatRequest(BaseModel):
    """Input to the knowledge chat orchestrator."""

    message: str = Field(..., description="The user's question")
    skills: List[Skill] = Field(default_factory=list)
    customer_profiles: List[CustomerProfile] = Field(default_factory=list)
    document_ids: List[str] = Field(default_factory=list)
    reference_urls: List[ReferenceUrl] = Field(default_factory=list)
    conversation_history: List[ChatMessage] = Field(default_factory=list)
    user_instructions: str = ""
    quick_mode: bool = Field(default=False, description="Use the faster model")
    call_mode: bool = Field(default=False, description="Ultra-brief answers for live calls")


class UsedItem(BaseModel):
    """Provenance of one item that made it into the prompt."""

    id: str
    title: str


class TransparencyInfo(BaseModel):
    """Raw prompt and per-pool breakdown for the admin transparency view."""

    system_prompt: str
    base_system_prompt: str
    knowledge_context: str = ""
    customer_context: str = ""
    document_context: str = ""
    url_context: str = ""
    model: str
    max_tokens: int
    temperature: float
    estimated_tokens: Dict[str, int] = Field(default_factory=dict)


class KnowledgeChatResponse(BaseModel):
    """Output of the knowledge chat service."""

    response: str
    skills_used: List[UsedItem] = Field(default_factory=list)
    customers_used: List[UsedItem] = Field(default_factory=list)
    documents_used: List[UsedItem] = Field(default_factory=list)
    urls_used: List[UsedItem] = Field(default_factory=list)
    context_truncated: bool = False
    transparency: Optional[TransparencyInfo] = None


class CompletionRequest(BaseModel):
    """What the injected LLM completion function receives."""

    model: str
    system: str
    messages: List[Dict[str, Any]]
    max_tokens: int
    temperature: float
