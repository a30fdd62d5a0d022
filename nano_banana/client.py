"""Sync and async clients for OpenAI-compatible image generation endpoints."""

import logging
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_none,
)

from nano_banana.catalog import resolve_models_endpoint
from nano_banana.config import Settings, get_settings
from nano_banana.exceptions import (
    RECOVERABLE_ERRORS,
    EmptyModelListError,
    GenerationFailedError,
    HttpStatusError,
    MalformedResponseError,
    NanoBananaError,
    TransportError,
)
from nano_banana.models import GenerationRequest, GenerationResult, ModelDescriptor
from nano_banana.payload import build_payload, resolve_endpoint, resolve_model
from nano_banana.response import extract_image_urls, extract_model_list

logger = logging.getLogger(__name__)

# Raised by httpx while building or sending a request. UnicodeError covers
# header values (such as the API key) that cannot be encoded.
TRANSPORT_ERRORS = (httpx.HTTPError, UnicodeError)


def _auth_headers(apikey: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {apikey}",
        "Content-Type": "application/json",
    }


def _handle_error(response: httpx.Response, prefix: str = "API error") -> None:
    """Raise HttpStatusError for non-2xx responses."""
    if response.is_success:
        return
    body = response.text
    raise HttpStatusError(
        f"{prefix} {response.status_code}: {body}",
        status_code=response.status_code,
        body=body,
    )


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponseError(f"Invalid response from API: {e}") from e


def _parse_models(response: httpx.Response) -> list[ModelDescriptor]:
    """Validate a models listing response."""
    _handle_error(response, prefix="Failed to fetch model list")
    models = extract_model_list(_decode_json(response))
    if not models:
        raise EmptyModelListError("Model list is empty")
    try:
        return [ModelDescriptor.model_validate(model) for model in models]
    except ValidationError as e:
        raise MalformedResponseError(f"Invalid model list entry: {e}") from e


def _coerce_request(request: GenerationRequest | dict[str, Any]) -> GenerationRequest:
    if isinstance(request, GenerationRequest):
        return request
    return GenerationRequest.model_validate(request)


def _check_max_retries(max_retries: int) -> int:
    if max_retries < 1:
        raise ValueError(f"max_retries must be at least 1, got {max_retries}")
    return max_retries


def _log_failed_attempt(attempts: int) -> Callable[[RetryCallState], None]:
    """Build a tenacity ``after`` hook that logs each failed attempt."""

    def log(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        detail = error.message if isinstance(error, NanoBananaError) else error
        logger.warning(
            f"Image generation attempt {retry_state.attempt_number}/{attempts} failed: {detail}"
        )

    return log


def _retry_policy(attempts: int) -> dict[str, Any]:
    """Immediate retry on recoverable failures, bounded by ``attempts``."""
    return {
        "stop": stop_after_attempt(attempts),
        "wait": wait_none(),
        "retry": retry_if_exception_type(RECOVERABLE_ERRORS),
        "after": _log_failed_attempt(attempts),
        "reraise": False,
    }


def _generation_failed(error: RetryError) -> GenerationFailedError:
    """Convert tenacity's exhaustion error into the terminal error."""
    last_attempt = error.last_attempt
    return GenerationFailedError(last_attempt.attempt_number, last_attempt.exception())


class NanoBananaClient:
    """Synchronous image generation client.

    Example:
        with NanoBananaClient() as client:
            result = client.generate(
                GenerationRequest(prompt="A banana on the moon", apikey="sk-...")
            )
            print(result.image_urls[0])
    """

    def __init__(
        self,
        settings: Settings | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Default endpoint, model and retry bound. Falls back to
                the process-wide settings when omitted.
            timeout: Request timeout in seconds. Defaults to
                ``settings.request_timeout``.
        """
        self.settings = settings or get_settings()
        self.default_endpoint = self.settings.api_endpoint
        self.default_model = self.settings.model_id
        self.max_retries = self.settings.max_retries
        self.timeout = timeout if timeout is not None else self.settings.request_timeout
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create httpx client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "NanoBananaClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _send(self, method: str, url: str, apikey: str, body: Any = None) -> httpx.Response:
        """Build and send one request, wrapping transport failures."""
        client = self._get_client()
        try:
            request = client.build_request(method, url, json=body, headers=_auth_headers(apikey))
            return client.send(request)
        except TRANSPORT_ERRORS as e:
            raise TransportError(f"Request failed: {e}") from e

    def _generate_once(self, endpoint: str, apikey: str, body: dict[str, Any]) -> list[str]:
        response = self._send("POST", endpoint, apikey, body)
        _handle_error(response)
        return extract_image_urls(_decode_json(response))

    def generate(
        self,
        request: GenerationRequest | dict[str, Any],
        max_retries: int | None = None,
    ) -> GenerationResult:
        """Generate one or more images.

        Every failed attempt (network error, non-2xx status, malformed
        response, prose reply, empty reply) is retried immediately until
        ``max_retries`` attempts have been made.

        Args:
            request: Generation request or an equivalent dict.
            max_retries: Total number of attempts. Defaults to
                ``settings.max_retries``.

        Returns:
            GenerationResult with at least one image reference.

        Raises:
            GenerationFailedError: If every attempt failed.
            ValueError: If max_retries is less than 1.
        """
        request = _coerce_request(request)
        attempts = _check_max_retries(max_retries if max_retries is not None else self.max_retries)

        endpoint = resolve_endpoint(request.endpoint, self.default_endpoint)
        model = resolve_model(request.model, self.default_model)
        body = build_payload(request, model).to_json()
        logger.debug(f"Image generation to {endpoint} (model={model}, attempts={attempts})")

        try:
            for attempt in Retrying(**_retry_policy(attempts)):
                with attempt:
                    urls = self._generate_once(endpoint, request.apikey, body)
        except RetryError as e:
            failure = _generation_failed(e)
            raise failure from failure.last_error

        attempt_number = attempt.retry_state.attempt_number
        if attempt_number > 1:
            logger.info(f"Image generation succeeded on attempt {attempt_number}/{attempts}")
        return GenerationResult(image_urls=urls)

    def fetch_models(self, apikey: str, endpoint: str | None = None) -> list[ModelDescriptor]:
        """List models available at the endpoint.

        Args:
            apikey: Bearer token.
            endpoint: Completion endpoint; the models URL is derived from it.
                Defaults to the configured endpoint.

        Returns:
            Models in the order the provider listed them.

        Raises:
            TransportError: If the request could not be sent.
            HttpStatusError: If the endpoint answered with a non-2xx status.
            EmptyModelListError: If no models were listed.
        """
        url = resolve_models_endpoint(resolve_endpoint(endpoint, self.default_endpoint))
        return _parse_models(self._send("GET", url, apikey))


class AsyncNanoBananaClient:
    """Asynchronous image generation client.

    Example:
        async with AsyncNanoBananaClient() as client:
            result = await client.generate(
                GenerationRequest(prompt="A banana on the moon", apikey="sk-...")
            )
    """

    def __init__(
        self,
        settings: Settings | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the async client.

        Args:
            settings: Default endpoint, model and retry bound.
            timeout: Request timeout in seconds.
        """
        self.settings = settings or get_settings()
        self.default_endpoint = self.settings.api_endpoint
        self.default_model = self.settings.model_id
        self.max_retries = self.settings.max_retries
        self.timeout = timeout if timeout is not None else self.settings.request_timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AsyncNanoBananaClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _send(self, method: str, url: str, apikey: str, body: Any = None) -> httpx.Response:
        """Build and send one request, wrapping transport failures."""
        client = await self._get_client()
        try:
            request = client.build_request(method, url, json=body, headers=_auth_headers(apikey))
            return await client.send(request)
        except TRANSPORT_ERRORS as e:
            raise TransportError(f"Request failed: {e}") from e

    async def _generate_once(self, endpoint: str, apikey: str, body: dict[str, Any]) -> list[str]:
        response = await self._send("POST", endpoint, apikey, body)
        _handle_error(response)
        return extract_image_urls(_decode_json(response))

    async def generate(
        self,
        request: GenerationRequest | dict[str, Any],
        max_retries: int | None = None,
    ) -> GenerationResult:
        """Generate one or more images (async).

        Attempts run one after another, never concurrently.

        Args:
            request: Generation request or an equivalent dict.
            max_retries: Total number of attempts.

        Returns:
            GenerationResult with at least one image reference.

        Raises:
            GenerationFailedError: If every attempt failed.
            ValueError: If max_retries is less than 1.
        """
        request = _coerce_request(request)
        attempts = _check_max_retries(max_retries if max_retries is not None else self.max_retries)

        endpoint = resolve_endpoint(request.endpoint, self.default_endpoint)
        model = resolve_model(request.model, self.default_model)
        body = build_payload(request, model).to_json()
        logger.debug(f"Image generation to {endpoint} (model={model}, attempts={attempts})")

        try:
            async for attempt in AsyncRetrying(**_retry_policy(attempts)):
                with attempt:
                    urls = await self._generate_once(endpoint, request.apikey, body)
        except RetryError as e:
            failure = _generation_failed(e)
            raise failure from failure.last_error

        attempt_number = attempt.retry_state.attempt_number
        if attempt_number > 1:
            logger.info(f"Image generation succeeded on attempt {attempt_number}/{attempts}")
        return GenerationResult(image_urls=urls)

    async def fetch_models(self, apikey: str, endpoint: str | None = None) -> list[ModelDescriptor]:
        """List models available at the endpoint (async).

        Args:
            apikey: Bearer token.
            endpoint: Completion endpoint; the models URL is derived from it.

        Returns:
            Models in the order the provider listed them.
        """
        url = resolve_models_endpoint(resolve_endpoint(endpoint, self.default_endpoint))
        return _parse_models(await self._send("GET", url, apikey))
