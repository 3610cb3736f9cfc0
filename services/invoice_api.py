"""
Invoicing API Client

Thin wrapper around one authenticated requests.Session for the invoice
CRUD endpoints. The client never interprets status codes; callers assert
on the returned response.

Lifecycle:
    UNINITIALIZED --init()--> READY --dispose()--> DISPOSED

Example:
    client = InvoiceApiClient()
    client.init()
    response = client.create_invoice(build_invoice_payload())
    invoice_id = extract_invoice_id(response.json())
    client.dispose()
"""

import dataclasses
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

import requests

from config.env_config import EnvironmentConfig, require_env, settings

logger = logging.getLogger(__name__)

INVOICES_PATH = "/v1/invoices"
ID_KEYS = ("id", "_id", "invoiceId")


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status accepted by the API."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"


class ClientState(Enum):
    """API client lifecycle states."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    DISPOSED = "disposed"


class IllegalStateError(Exception):
    """Raised when an operation is called outside its lifecycle phase."""

    def __init__(self, message: str, state: ClientState):
        self.state = state
        super().__init__(f"{message} (state: {state.value})")


@dataclass(frozen=True)
class InvoicePayload:
    """Request body for invoice create/update calls."""

    customer_name: str
    description: str
    amount: float
    currency: str
    status: InvoiceStatus
    due_date: str  # ISO yyyy-mm-dd

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the API's field names."""
        return {
            "customerName": self.customer_name,
            "description": self.description,
            "amount": self.amount,
            "currency": self.currency,
            "status": InvoiceStatus(self.status).value,
            "dueDate": self.due_date,
        }

    def with_overrides(self, **fields) -> "InvoicePayload":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **fields)


def build_invoice_payload(**overrides) -> InvoicePayload:
    """
    Build a default-populated invoice payload.

    The customer name is unique per call (epoch milliseconds) and the due
    date is seven days from today (UTC). Any field can be overridden by keyword.

    Raises:
        TypeError: If an override names an unknown field
    """
    due_date = (datetime.now(timezone.utc).date() + timedelta(days=7)).isoformat()
    payload = InvoicePayload(
        customer_name=f"QA Customer {int(time.time() * 1000)}",
        description="Automation invoice for testing",
        amount=1250,
        currency="USD",
        status=InvoiceStatus.DRAFT,
        due_date=due_date,
    )
    return payload.with_overrides(**overrides) if overrides else payload


def extract_invoice_id(body: Any) -> Optional[str]:
    """Return the invoice identifier from a response body, if any."""
    if not isinstance(body, Mapping):
        return None
    for key in ID_KEYS:
        value = body.get(key)
        if value not in (None, ""):
            return str(value)
    return None


class InvoiceApiClient:
    """
    Client for the invoicing REST API.

    One session is shared by every call between init() and dispose().
    Requests are not synchronized; tests that depend on a previous call's
    side effect must run serially.
    """

    def __init__(self, config: EnvironmentConfig = None, timeout: float = None):
        self.config = config or settings
        self.timeout = timeout if timeout is not None else self.config.API_TIMEOUT
        self.base_url = ""
        self.state = ClientState.UNINITIALIZED
        self._session: Optional[requests.Session] = None

    def __enter__(self) -> "InvoiceApiClient":
        self.init()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def init(self) -> None:
        """
        Open the authenticated session.

        Raises:
            MissingConfigurationError: If API_BASE_URL or API_AUTH is empty
            IllegalStateError: If called more than once
        """
        if self.state is not ClientState.UNINITIALIZED:
            raise IllegalStateError("API client can only be initialized once", self.state)

        base_url = require_env("API_BASE_URL", self.config)
        auth = require_env("API_AUTH", self.config)

        session = requests.Session()
        session.headers.update(
            {
                "Authorization": auth,
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )
        self._session = session
        self.base_url = base_url.rstrip("/")
        self.state = ClientState.READY
        logger.info("Invoice API client ready for %s", self.base_url)

    def dispose(self) -> None:
        """Release the session. Safe to call in any state."""
        if self._session is not None:
            self._session.close()
            self._session = None
            logger.info("Invoice API client disposed")
        if self.state is ClientState.READY:
            self.state = ClientState.DISPOSED

    @property
    def is_ready(self) -> bool:
        return self.state is ClientState.READY

    # =========================================================================
    # CRUD
    # =========================================================================

    def create_invoice(
        self, payload: Union[InvoicePayload, Mapping[str, Any]]
    ) -> requests.Response:
        """POST /v1/invoices"""
        return self._request("post", INVOICES_PATH, json=_body(payload))

    def get_invoice(self, invoice_id: str) -> requests.Response:
        """GET /v1/invoices/{id}"""
        return self._request("get", f"{INVOICES_PATH}/{invoice_id}")

    def update_invoice(
        self, invoice_id: str, payload: Union[InvoicePayload, Mapping[str, Any]]
    ) -> requests.Response:
        """PUT /v1/invoices/{id} (full replace)"""
        return self._request("put", f"{INVOICES_PATH}/{invoice_id}", json=_body(payload))

    def patch_invoice(self, invoice_id: str, fields: Mapping[str, Any]) -> requests.Response:
        """PATCH /v1/invoices/{id} (partial update)"""
        return self._request("patch", f"{INVOICES_PATH}/{invoice_id}", json=_body(fields))

    def delete_invoice(self, invoice_id: str) -> requests.Response:
        """DELETE /v1/invoices/{id}"""
        return self._request("delete", f"{INVOICES_PATH}/{invoice_id}")

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        session = self._require_session()
        kwargs.setdefault("timeout", self.timeout)

        response = session.request(method.upper(), f"{self.base_url}{path}", **kwargs)
        logger.debug("%s %s -> %s", method.upper(), path, response.status_code)
        return response

    def _require_session(self) -> requests.Session:
        if self.state is not ClientState.READY or self._session is None:
            raise IllegalStateError(
                "API context not initialized. Call init() before making requests.", self.state
            )
        return self._session


def _body(payload: Union[InvoicePayload, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(payload, InvoicePayload):
        return payload.to_dict()
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in dict(payload).items()
    }
