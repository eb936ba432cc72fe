import json
from typing import Optional

import httpx
from pydantic import ValidationError

from flowsync.config import CLIENT_BASE_URL, HTTP_TIMEOUT, PROCESS_ENDPOINT
from flowsync.schemas.graph import GraphDocument, SaveResult, Snapshot
from flowsync.utils.errors import FetchError, ParseError, SaveError
from flowsync.utils.logger import get_logger

logger = get_logger(__name__)


class PersistenceClient:
    """Loads and saves the process document over HTTP.

    Every call opens its own ``httpx.AsyncClient``. Nothing is retried or
    queued: two overlapping saves are two independent writes and the server
    keeps whichever lands last. ``timeout=None`` waits indefinitely.
    """

    def __init__(
        self,
        base_url: str = CLIENT_BASE_URL,
        path: str = PROCESS_ENDPOINT,
        timeout: Optional[float] = HTTP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.path = path
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def load(self) -> GraphDocument:
        try:
            async with self._client() as client:
                response = await client.get(self.path)
        except httpx.HTTPError as e:
            logger.error(f"There was a problem with the fetch operation: {e}")
            raise FetchError(f"Request to {self.path} failed: {e}") from e

        if not response.is_success:
            logger.error(f"HTTP error! status: {response.status_code}")
            raise FetchError(f"HTTP error! status: {response.status_code}", status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Response body is not valid JSON: {e}")
            raise ParseError(f"Response body is not valid JSON: {e}", status_code=response.status_code) from e

        try:
            document = GraphDocument.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Response body is not a process document: {e}")
            raise ParseError(f"Response body is not a process document: {e}", status_code=response.status_code) from e

        logger.info(f"Loaded {len(document.nodes)} nodes and {len(document.edges)} edges")
        return document

    # 只发送节点和连线，服务端文件被整体覆盖
    async def save(self, snapshot: Snapshot) -> SaveResult:
        # NaN、inf 或无法序列化的值在发送前就报错
        try:
            body = json.dumps(snapshot.model_dump(), allow_nan=False)
        except (TypeError, ValueError) as e:
            logger.error(f"Snapshot cannot be encoded as JSON: {e}")
            raise SaveError(f"Snapshot cannot be encoded as JSON: {e}") from e

        logger.debug(f"Sending POST request to {self.path} with data: {body}")
        try:
            async with self._client() as client:
                response = await client.post(
                    self.path, content=body, headers={"Content-Type": "application/json"}
                )
        except httpx.HTTPError as e:
            logger.error(f"There was a problem with the save operation: {e}")
            raise SaveError(f"Request to {self.path} failed: {e}") from e

        if not response.is_success:
            logger.error(f"HTTP error! status: {response.status_code}")
            raise SaveError(f"HTTP error! status: {response.status_code}", status_code=response.status_code)

        logger.info(f"Save successful: {response.text}")
        return SaveResult(ok=True, status_code=response.status_code, message=response.text)
