"""iDEAL XML API HTTP client for bank lookup, payment initiation and status checks"""

import time
from typing import Callable, Mapping, Optional, TypeVar

import httpx

from ideal_gateway.config import settings
from ideal_gateway.domain.exceptions import ConfigurationError, DecodeError, TransportError
from ideal_gateway.domain.models import BankList, ClientConfig, TransactionRequest, TransactionResult
from ideal_gateway.infrastructure.clients.decoder import decode_bank_list, decode_transaction
from ideal_gateway.infrastructure.clients.endpoint import EndpointBuilder, ParamValue
from ideal_gateway.infrastructure.observability.logging import log, log_api_call, log_response_body
from ideal_gateway.infrastructure.observability.metrics import record_api_call, record_transaction_status

T = TypeVar("T")


class IdealClient:
    """
    Client for the iDEAL payment-initiation API.

    Configuration is fixed at construction; use with_profile_key() to get a
    client for another payment profile. Every call is a single blocking GET
    with no retries. Timeouts are those of the underlying httpx.Client.
    """

    def __init__(
        self,
        partner_id: int,
        testmode: bool = False,
        profile_key: str = "",
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
        trace_bodies: bool | None = None,
    ):
        self.config = ClientConfig(
            partner_id=partner_id,
            testmode=testmode,
            profile_key=profile_key or "",
            base_url=base_url or settings.ideal_api_base,
        )
        self.timeout = settings.http_timeout_seconds if timeout is None else timeout
        self.trace_bodies = settings.trace_response_bodies if trace_bodies is None else trace_bodies
        self.endpoint = EndpointBuilder(self.config.base_url, self.config.testmode)

        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(timeout=self.timeout)

    @classmethod
    def from_settings(cls, http_client: httpx.Client | None = None) -> "IdealClient":
        """
        Build a client from environment configuration.

        Raises:
            ConfigurationError: If IDEAL_PARTNER_ID is not set
        """
        if settings.ideal_partner_id is None:
            raise ConfigurationError("IDEAL_PARTNER_ID is not configured")
        return cls(
            partner_id=settings.ideal_partner_id,
            testmode=settings.ideal_testmode,
            profile_key=settings.ideal_profile_key,
            base_url=settings.ideal_api_base,
            http_client=http_client,
        )

    @property
    def profile_key(self) -> str:
        return self.config.profile_key

    def with_profile_key(self, profile_key: str) -> "IdealClient":
        """Return a client using `profile_key`, sharing this client's transport"""
        return IdealClient(
            partner_id=self.config.partner_id,
            testmode=self.config.testmode,
            profile_key=profile_key,
            base_url=self.config.base_url,
            timeout=self.timeout,
            http_client=self._http,
            trace_bodies=self.trace_bodies,
        )

    def close(self) -> None:
        """Close the HTTP client if this instance created it"""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "IdealClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def list_banks(self) -> BankList:
        """
        Fetch the banks that can be used right now.

        Raises:
            TransportError: On network failure or a non-200 response
            DecodeError: On a malformed bank list document
        """
        return self._call("banklist", {}, decode_bank_list)

    def initiate_transaction(self, request: TransactionRequest) -> TransactionResult:
        """
        Create a new transaction at the bank the end user picked.

        The caller must redirect the end user to result.redirect_url to
        complete the payment.

        Raises:
            ValueError: If a required request field is None
            TransportError: On network failure or a non-200 response
            DecodeError: On a malformed or error response document
        """
        params: dict[str, ParamValue] = {"partnerid": self.config.partner_id}
        if self.config.profile_key:
            params["profile_key"] = self.config.profile_key
        params.update(
            {
                "amount": request.amount,
                "bank_id": request.bank_id,
                "description": request.description,
                "reporturl": request.report_url,
                "returnurl": request.return_url,
            }
        )
        return self._call(
            "fetch",
            params,
            lambda body: decode_transaction(body, with_redirect=True, operation="fetch"),
        )

    def check_transaction(self, transaction_id: str) -> TransactionResult:
        """
        Fetch the current status of a previously initiated transaction.

        Call this when the report URL is hit, or to poll.

        Raises:
            TransportError: On network failure or a non-200 response
            DecodeError: On a malformed or error response document
        """
        result = self._call(
            "check",
            {"partnerid": self.config.partner_id, "transaction_id": transaction_id},
            lambda body: decode_transaction(body, operation="check"),
        )
        record_transaction_status(result.status.value)
        return result

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _call(self, operation: str, params: Mapping[str, ParamValue], decode: Callable[[bytes], T]) -> T:
        url = self.endpoint.build(operation, params)
        start_time = time.time()

        try:
            response = self._http.get(url)
        except httpx.HTTPError as e:
            self._record(operation, None, "transport_error", start_time)
            log.error(f"iDEAL {operation} request failed: {e}")
            raise TransportError(f"iDEAL API unreachable during {operation}: {e}") from e

        if response.status_code != 200:
            self._record(operation, response.status_code, "transport_error", start_time)
            raise TransportError(
                f"iDEAL API error: status code {response.status_code}",
                status_code=response.status_code,
            )

        if self.trace_bodies:
            log_response_body(operation, response.content)

        try:
            result = decode(response.content)
        except DecodeError as e:
            self._record(operation, response.status_code, "decode_error", start_time)
            log.warning(f"iDEAL {operation} response not decodable: {e}")
            raise

        self._record(operation, response.status_code, "ok", start_time)
        return result

    @staticmethod
    def _record(operation: str, status_code: Optional[int], outcome: str, start_time: float) -> None:
        duration = time.time() - start_time
        record_api_call(operation, outcome, duration)
        log_api_call(operation, status_code, outcome, duration * 1000)
