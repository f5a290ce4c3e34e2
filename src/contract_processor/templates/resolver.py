"""
Template resolution.

Client-specific templates live in an external store reached over HTTP.
Resolution never fails: any store error falls back to the built-in catalog.
"""

from functools import lru_cache
from typing import Protocol
from urllib.parse import quote

import requests
import structlog

from contract_processor.config import get_settings
from contract_processor.exceptions import TemplateNotFoundError
from contract_processor.models.document import DocumentType, TemplateOrigin, TemplateRecord
from contract_processor.models.workflow import Degraded, Ok, Outcome
from contract_processor.templates.catalog import get_default_template

logger = structlog.get_logger(__name__)


class TemplateStore(Protocol):
    """Source of client-specific template bodies."""

    def fetch(self, client_id: str, document_type: DocumentType) -> str:
        """Return the raw template body or raise."""
        ...


class HttpTemplateStore:
    """
    Template store backed by the admin API.

    `GET <base>/clients/{client_id}/templates/{document_type}` answers with the
    template as plain text, or a non-2xx status when the client has none.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.template_store_url).rstrip("/")
        self.timeout = timeout or settings.template_store_timeout
        self._session = session

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def template_url(self, client_id: str, document_type: DocumentType) -> str:
        return (
            f"{self.base_url}/clients/{quote(client_id, safe='')}"
            f"/templates/{document_type.value}"
        )

    def fetch(self, client_id: str, document_type: DocumentType) -> str:
        url = self.template_url(client_id, document_type)
        logger.debug("template_fetch_started", url=url)

        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()

        body = response.text
        if not body.strip():
            raise TemplateNotFoundError(client_id, document_type.value)
        return body

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None


class TemplateResolver:
    """
    Resolves the template for a run in three tiers:

    1. no client id -> built-in template (`default`)
    2. client template fetched from the store (`client_custom`)
    3. store failure of any kind -> built-in template (`default_fallback`)
    """

    def __init__(self, store: TemplateStore | None = None):
        self._store = store

    @property
    def store(self) -> TemplateStore:
        if self._store is None:
            self._store = HttpTemplateStore()
        return self._store

    def resolve(
        self,
        client_id: str | None,
        document_type: DocumentType,
    ) -> Outcome[TemplateRecord]:
        if not client_id:
            logger.debug("template_default_used", document_type=document_type.value)
            return Ok(
                TemplateRecord(
                    body=get_default_template(document_type),
                    origin=TemplateOrigin.DEFAULT,
                )
            )

        try:
            body = self.store.fetch(client_id, document_type)
        except Exception as e:
            logger.warning(
                "template_fetch_failed",
                client_id=client_id,
                document_type=document_type.value,
                error=str(e),
            )
            return Degraded(
                TemplateRecord(
                    body=get_default_template(document_type),
                    origin=TemplateOrigin.DEFAULT_FALLBACK,
                ),
                reason=f"client template unavailable: {e}",
            )

        logger.info(
            "template_client_custom_used",
            client_id=client_id,
            document_type=document_type.value,
            size=len(body),
        )
        return Ok(TemplateRecord(body=body, origin=TemplateOrigin.CLIENT_CUSTOM))


@lru_cache()
def get_template_resolver() -> TemplateResolver:
    """Get cached template resolver instance."""
    return TemplateResolver()
