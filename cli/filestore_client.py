"""HTTP client for communicating with the file store service."""

import time
import uuid
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import httpx

from common.logging_config import get_logger
from cli.config import Config
from cli.constants import DOWNLOADS_DIR
from cli.models import CommandResult
from cli.utils import (
    format_file_size,
    format_timestamp,
    guess_file_type,
    iter_file_chunks,
    show_progress,
)

logger = get_logger(__name__)


def file_endpoint(name: str, *suffix: str) -> str:
    """
    Build /files/<name>[/suffix...] with the name encoded as one path segment.

    Names may contain any character, including "/", "?", "#" and "%".
    """
    return "/".join(("/files", quote(name, safe=""), *suffix))


class FileStoreClient:
    """HTTP client for the file store API with retry logic and error handling."""

    def __init__(self, config: Config):
        """
        Initialize file store client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.session = httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout()
        )
        self.request_id = None
        logger.info(f"Initialized FileStoreClient [base_url={config.get_base_url()}]")

    def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        max_retries: Optional[int] = None,
        **kwargs
    ) -> httpx.Response:
        """
        Make HTTP request with retry logic on 5xx errors and network failures.

        Args:
            method: HTTP method (GET, POST, DELETE, etc.)
            endpoint: API endpoint path
            max_retries: Max retry attempts (uses config default if None)
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            HTTP response object

        Raises:
            ConnectionError: If max retries exceeded or connection fails
        """
        retry_config = self.config.get_retry_config()
        max_retries = max_retries if max_retries is not None else retry_config['max_retries']
        backoff = retry_config['retry_backoff_multiplier']

        last_exception = None

        self.request_id = str(uuid.uuid4())
        headers = dict(kwargs.pop('headers', None) or {})
        headers.update(self._get_auth_header())
        headers['X-Request-ID'] = self.request_id

        logger.debug(
            f"Making request: {method} {endpoint} [request_id={self.request_id}]"
        )

        for attempt in range(max_retries + 1):
            try:
                response = self.session.request(method, endpoint, headers=headers, **kwargs)

                logger.debug(
                    f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                )

                if 400 <= response.status_code < 500:
                    logger.warning(
                        f"Client error: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                    )
                    return response

                if response.status_code >= 500 and attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Server error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} status={response.status_code}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue

                return response

            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = e
                if attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Network error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} error={type(e).__name__}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue
                logger.error(
                    f"Network error (max retries exceeded): {method} {endpoint} error={e} [request_id={self.request_id}]"
                )

        if isinstance(last_exception, httpx.TimeoutException):
            raise ConnectionError("Request timed out. Server may be overloaded.")
        if isinstance(last_exception, httpx.ConnectError):
            raise ConnectionError("Cannot connect to file store server. Is it running?")
        raise ConnectionError("Max retries exceeded")

    def _format_error(self, response: httpx.Response) -> str:
        """
        Map HTTP errors to user-friendly messages.

        Args:
            response: HTTP response object

        Returns:
            User-friendly error message
        """
        try:
            error_data = response.json()
            detail = error_data.get('detail', 'Unknown error')
            code = error_data.get('code', 'UNKNOWN')
        except ValueError:
            detail = response.text if response.text else 'Unknown error'
            code = 'UNKNOWN'

        error_messages = {
            'UNAUTHENTICATED': 'This command requires an identity. Please run: use <identity>',
            'INVALID_AUTHORIZATION': 'The configured identity was rejected by the server.',
            'QUOTA_EXCEEDED': f'Storage limit reached: {detail}',
            'SNAPSHOT_ERROR': 'The server could not persist its state. Please try again later.',
        }

        if code in error_messages:
            return error_messages[code]

        status_messages = {
            400: 'Bad request',
            401: 'Not authenticated',
            404: 'Not found',
            422: 'Invalid request',
            500: 'Server error',
            503: 'Service unavailable',
            507: 'Insufficient storage',
        }

        message = status_messages.get(response.status_code, str(detail))
        return f"{message} (Code: {code})" if code != 'UNKNOWN' else message

    def _get_auth_header(self) -> dict:
        """
        Get Authorization header carrying the configured principal.

        Returns:
            Dictionary with Authorization header, empty when acting anonymously
        """
        identity = self.config.get_identity()
        if not identity:
            return {}
        return {'Authorization': f'Bearer {identity}'}

    def _call(self, action: str, method: str, endpoint: str, on_success, **kwargs) -> CommandResult:
        """Run a request and turn the outcome into a message for the REPL."""
        try:
            response = self._request_with_retry(method, endpoint, **kwargs)
            if response.status_code < 400:
                result = on_success(response)
                return result if isinstance(result, CommandResult) else CommandResult(result)
            logger.warning(f"{action} failed status={response.status_code}")
            return CommandResult(f"{action} failed: {self._format_error(response)}", ok=False)
        except ConnectionError as e:
            logger.error(f"Connection error during {action.lower()}: {e}")
            return CommandResult(f"Error: {e}", ok=False)
        except httpx.HTTPError as e:
            logger.error(f"Unexpected HTTP error during {action.lower()}: {e}", exc_info=True)
            return CommandResult(f"Unexpected error during {action.lower()}: {e}", ok=False)

    def whoami(self) -> CommandResult:
        identity = self.config.get_identity()
        return CommandResult(f"Identity: {identity}" if identity else "Identity: anonymous")

    def use_identity(self, identity: Optional[str]) -> CommandResult:
        self.config.set_identity(identity)
        logger.info("Switched identity")
        return CommandResult(f"Now acting as {identity}" if identity else "Now acting anonymously")

    def upload(
        self,
        file_path: str,
        file_type: Optional[str] = None,
        project_id: Optional[str] = None,
        replace: bool = False,
    ) -> CommandResult:
        """
        Upload a local file as consecutive chunks (index 0, 1, 2, ...).

        Uploading to a name that already exists appends the new chunks to it,
        unless replace is set, in which case the file is deleted first.

        Returns:
            Formatted result message
        """
        path = Path(file_path).expanduser()
        if not path.is_file():
            return CommandResult(f"Error: File not found: {file_path}", ok=False)

        name = path.name
        file_size = path.stat().st_size
        file_type = file_type or guess_file_type(name)
        chunk_size = self.config.get_chunk_size()

        try:
            if replace:
                response = self._request_with_retry('DELETE', file_endpoint(name))
                if response.status_code >= 400:
                    return CommandResult(f"Upload failed: {self._format_error(response)}", ok=False)

            pieces = iter_file_chunks(str(path), chunk_size) if file_size else iter([b""])
            sent = 0
            index = 0
            for index, piece in enumerate(pieces):
                data = {'index': str(index), 'file_type': file_type}
                if project_id:
                    data['project_id'] = project_id

                # Appends are not idempotent, so a failed chunk is never resent.
                response = self._request_with_retry(
                    'POST',
                    file_endpoint(name, 'chunks'),
                    max_retries=0,
                    files={'chunk': (name, piece)},
                    data=data,
                )
                if response.status_code >= 400:
                    logger.warning(f"Upload of {name} stopped at chunk {index} status={response.status_code}")
                    return CommandResult(
                        f"Upload failed at chunk {index}: {self._format_error(response)}", ok=False
                    )

                sent += len(piece)
                show_progress(name, sent, file_size)

            logger.info(f"Uploaded {name}: {index + 1} chunks, {file_size} bytes")
            return CommandResult(
                f"Uploaded: {name} ({index + 1} chunk(s), {format_file_size(file_size)}, type {file_type})"
            )

        except ConnectionError as e:
            logger.error(f"Connection error during upload: {e}")
            return CommandResult(f"Error: {e}", ok=False)
        except httpx.HTTPError as e:
            logger.error(f"Unexpected HTTP error during upload: {e}", exc_info=True)
            return CommandResult(f"Unexpected error during upload: {e}", ok=False)
        except OSError as e:
            logger.error(f"Cannot read {file_path}: {e}")
            return CommandResult(f"Error: Cannot read {file_path}: {e}", ok=False)

    def list_files(self) -> CommandResult:
        def render(response: httpx.Response) -> str:
            files = response.json()['files']
            if not files:
                return "No files found."
            lines = [f"Found {len(files)} file(s):"]
            for f in files:
                project = f.get('project_id') or '-'
                lines.append(
                    f"  {f['name']:<30} {format_file_size(f['size']):>12}  {f['file_type']:<25} "
                    f"project={project}  uploaded={format_timestamp(f['uploaded_at'])}"
                )
            return "\n".join(lines)

        return self._call("List", 'GET', '/files', render)

    def list_project(self, project_id: str) -> CommandResult:
        def render(response: httpx.Response) -> str:
            files = response.json()['files']
            if not files:
                return f"No files associated with project {project_id}."
            lines = [f"Project {project_id}: {len(files)} file(s)"]
            for f in files:
                lines.append(
                    f"  {f['name']:<30} {format_file_size(f['total_size']):>12}  {len(f['chunks'])} chunk(s)"
                )
            return "\n".join(lines)

        return self._call("List project", 'GET', f'/projects/{quote(project_id, safe="")}/files', render)

    def file_info(self, name: str) -> CommandResult:
        def render(response: httpx.Response) -> CommandResult:
            file = response.json()['file']
            if file is None:
                return CommandResult(f"File not found: {name}", ok=False)
            indices = ", ".join(str(chunk['index']) for chunk in file['chunks'])
            return CommandResult("\n".join([
                f"Name:      {file['name']}",
                f"Size:      {format_file_size(file['total_size'])} ({file['total_size']} bytes)",
                f"Type:      {file['file_type']}",
                f"Project:   {file.get('project_id') or '-'}",
                f"Uploaded:  {format_timestamp(file['uploaded_at'])}",
                f"Chunks:    {len(file['chunks'])} [indices: {indices}]",
            ]))

        return self._call("Info", 'GET', file_endpoint(name, 'metadata'), render)

    def chunk_count(self, name: str) -> CommandResult:
        return self._call(
            "Chunk count", 'GET', file_endpoint(name, 'chunks', 'count'),
            lambda response: f"{name}: {response.json()['chunk_count']} chunk(s)"
        )

    def download(self, name: str, output_path: Optional[str] = None) -> CommandResult:
        """
        Download a reassembled file to output_path (default: downloads/<basename of name>).
        """
        local_name = Path(name).name or 'download'
        output_file = Path(output_path) if output_path else Path(DOWNLOADS_DIR) / local_name
        if output_file.is_dir():
            output_file = output_file / local_name

        def save(response: httpx.Response) -> str:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.write_bytes(response.content)
            logger.info(f"Downloaded {name} to {output_file} ({len(response.content)} bytes)")
            return f"Downloaded: {name} -> {output_file} ({format_file_size(len(response.content))})"

        return self._call("Download", 'GET', file_endpoint(name, 'download'), save)

    def delete(self, name: str) -> CommandResult:
        def render(response: httpx.Response) -> CommandResult:
            if response.json()['deleted']:
                return CommandResult(f"Deleted: {name}")
            return CommandResult(f"Nothing deleted: {name} does not exist", ok=False)

        return self._call("Delete", 'DELETE', file_endpoint(name), render)

    def associate(self, name: str, project_id: str) -> CommandResult:
        def render(response: httpx.Response) -> CommandResult:
            if response.json()['associated']:
                return CommandResult(f"Associated {name} with project {project_id}")
            return CommandResult(f"File not found: {name}", ok=False)

        return self._call(
            "Associate", 'PUT', file_endpoint(name, 'project'), render,
            json={'project_id': project_id}
        )

    def usage(self) -> CommandResult:
        def render(response: httpx.Response) -> str:
            total = response.json()['total_bytes']
            return f"Storage used: {format_file_size(total)} ({total} bytes)"

        return self._call("Usage", 'GET', '/storage/usage', render)

    def renewable_projects(self) -> CommandResult:
        def render(response: httpx.Response) -> str:
            projects = response.json()['projects']
            return "Renewable projects:\n" + "\n".join(f"  - {p}" for p in projects)

        return self._call("Renewable projects", 'GET', '/projects/renewable', render)

    def close(self) -> None:
        self.session.close()
