"""
ZeroBounce email validation client.

Thin async wrapper over the single-address and batch endpoints. HTTP and
transport failures are mapped onto the EmailValidationError hierarchy; there
is no retry, callers decide whether a failure is fatal.
"""

import httpx
from typing import Any, Dict, List, Optional, Sequence
from core.config import settings
from core.exceptions import (
    EmailValidationError,
    NetworkError,
    RateLimitError,
    ValidationServiceAuthError,
)
import logging

logger = logging.getLogger(__name__)


class ZeroBounceClient:
    """
    Attributes:
        api_key: ZeroBounce API key
        api_url: Base URL for single validation (GET {api_url}/validate)
        batch_url: Base URL for batch validation (POST {batch_url}/validatebatch)
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        batch_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.api_key = api_key or settings.ZEROBOUNCE_API_KEY
        self.api_url = (api_url or settings.ZEROBOUNCE_API_URL).rstrip("/")
        self.batch_url = (batch_url or settings.ZEROBOUNCE_BATCH_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.ZEROBOUNCE_TIMEOUT
        self._client = client or httpx.AsyncClient(timeout=self.timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    def _raise_for_status(self, response: httpx.Response, url: str, context: Dict[str, Any]) -> None:
        context = {**context, "url": url, "status_code": response.status_code}

        if response.status_code in (401, 403):
            raise ValidationServiceAuthError(
                f"ZeroBounce rejected the API key ({response.status_code} {response.reason_phrase})",
                context=context
            )

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                f"ZeroBounce rate limit exceeded ({response.status_code} {response.reason_phrase})",
                context=context,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None
            )

        if response.status_code >= 500:
            raise NetworkError(
                f"ZeroBounce server error ({response.status_code} {response.reason_phrase})",
                context=context
            )

        if response.status_code >= 400:
            raise EmailValidationError(
                f"ZeroBounce request failed ({response.status_code} {response.reason_phrase})",
                context=context
            )

    async def _send(self, method: str, url: str, context: Dict[str, Any], **kwargs) -> Dict[str, Any]:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise NetworkError(
                "ZeroBounce request timed out",
                context={**context, "url": url, "timeout": self.timeout},
                original_exception=e
            )
        except httpx.HTTPError as e:
            raise NetworkError(
                "ZeroBounce request failed",
                context={**context, "url": url},
                original_exception=e
            )

        self._raise_for_status(response, url, context)

        try:
            return response.json()
        except ValueError as e:
            raise EmailValidationError(
                "ZeroBounce returned a non-JSON body",
                context={**context, "url": url, "status_code": response.status_code},
                original_exception=e
            )

    async def validate_batch(self, emails: Sequence[str]) -> Dict[str, Any]:
        """
        Validate many addresses in one call.

        Returns the raw response; results are under "email_batch", each with
        "address", "status" and "sub_status".
        """
        if emails is None:
            raise EmailValidationError("Emails are undefined")

        url = f"{self.batch_url}/validatebatch"
        logger.debug(f"Validating batch of {len(emails)} emails")
        return await self._send(
            "POST",
            url,
            {"batch_size": len(emails)},
            json={
                "api_key": self.api_key,
                "email_batch": [{"email_address": email} for email in emails],
            },
        )

    async def validate(self, email: str) -> Dict[str, Any]:
        """Validate one address; the response carries "status" and "sub_status"."""
        url = f"{self.api_url}/validate"
        return await self._send(
            "GET",
            url,
            {"email": email},
            params={"api_key": self.api_key, "email": email, "ip_address": ""},
        )


def batch_results(response: Any) -> List[Dict[str, Any]]:
    """Per-address results of a batch call; a non-object body or a non-list email_batch is an error"""
    results = response.get("email_batch") if isinstance(response, dict) else None
    if results is None and isinstance(response, dict):
        return []
    if not isinstance(results, list) or not all(isinstance(result, dict) for result in results):
        raise EmailValidationError(
            "ZeroBounce returned a malformed batch response",
            context={"body_type": type(response).__name__}
        )
    return results
