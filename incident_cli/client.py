"""Incident API client for making HTTP requests."""

import httpx
from typing import Optional, List, Dict, Any


class IncidentClientError(Exception):
    """Base exception for incident client errors."""
    pass


class ClientConnectionError(IncidentClientError):
    """Raised when the incident API cannot be reached."""
    pass


class RequestRejectedError(IncidentClientError):
    """Raised when the API rejects a request with a 4xx response."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class IncidentClient:
    """Client for interacting with the Incident Management API."""

    def __init__(self, base_url: str, timeout: float = 60.0):
        """
        Initialize the incident client.

        Args:
            base_url: Base URL of the incident service
            timeout: Request timeout in seconds; creation waits on AI classification
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout
            )
        return self._client

    def _raise_for_error(self, response: httpx.Response):
        if response.status_code < 400:
            return

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        error = body.get("error") or body.get("detail") or "Unknown error"
        details = body.get("details")

        if response.status_code < 500:
            raise RequestRejectedError(f"{error}", details=details)

        message = f"API error: {error}"
        if details:
            message += f" ({details})"
        raise IncidentClientError(message)

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        client = self._get_client()

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.ConnectError as e:
            raise ClientConnectionError(f"Failed to connect to incident API at {self.base_url}: {e}")
        except httpx.TimeoutException:
            raise ClientConnectionError(f"Request timed out after {self.timeout} seconds")
        except httpx.HTTPError as e:
            raise IncidentClientError(f"HTTP error: {e}")

        self._raise_for_error(response)
        return response

    async def create_incident(
        self,
        title: str,
        description: str,
        status: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a new incident.

        Args:
            title: Short incident title
            description: Incident description
            status: Optional initial status
            priority: Optional priority

        Returns:
            The created incident, including AI severity and category

        Raises:
            ClientConnectionError: If connection to the API fails
            RequestRejectedError: If the API rejects the incident
            IncidentClientError: For other API errors
        """
        payload: Dict[str, Any] = {"title": title, "description": description}
        if status:
            payload["status"] = status
        if priority:
            payload["priority"] = priority

        response = await self._request("POST", "/incidents", json=payload)
        return response.json()

    async def list_incidents(self) -> List[Dict[str, Any]]:
        """
        List all incidents.

        Raises:
            ClientConnectionError: If connection to the API fails
            IncidentClientError: For other API errors
        """
        response = await self._request("GET", "/incidents")
        return response.json() or []

    async def health(self) -> Dict[str, Any]:
        response = await self._request("GET", "/health")
        return response.json()

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
