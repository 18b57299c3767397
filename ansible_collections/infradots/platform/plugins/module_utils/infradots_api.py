# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

"""
HTTP access to the Infradots platform API.

Every call is a single JSON request/response round trip authenticated with a
bearer token. Transport is delegated to Ansible's ``fetch_url`` so that the
usual ``validate_certs``/proxy handling applies.
"""

import json
from typing import Any, NamedTuple, Optional

from ansible.module_utils.common.text.converters import to_text
from ansible.module_utils.urls import fetch_url

DEFAULT_HOSTNAME = 'api.infradots.com'
DEFAULT_TIMEOUT = 30
DEFAULT_FOLLOW_REDIRECTS = 'none'


class InfradotsError(Exception):
    """Base exception for Infradots operations"""
    pass


class InfradotsValidationError(InfradotsError):
    """Invalid input, detected before any request is sent"""
    pass


class InfradotsTransportError(InfradotsError):
    """Connection or TLS failure"""
    pass


class InfradotsSerializationError(InfradotsError):
    """Response body could not be decoded"""
    pass


class InfradotsNotFoundError(InfradotsError):
    """A lookup by id or natural key matched nothing"""
    pass


class InfradotsAPIError(InfradotsError):
    """The API answered with a status the operation does not accept"""

    def __init__(self, message: str, status: Optional[int] = None, body: str = ''):
        self.message = message
        self.status = status
        self.body = body
        super().__init__(f"{message} (status: {status}, body: {body})")


class InfradotsConnection(NamedTuple):
    """Connection settings shared read-only by every adapter."""

    hostname: str
    token: str
    validate_certs: bool = True
    timeout: int = DEFAULT_TIMEOUT

    @property
    def base_url(self) -> str:
        if '://' in self.hostname:
            return self.hostname.rstrip('/')
        return f"https://{self.hostname.rstrip('/')}"

    @classmethod
    def from_params(cls, params: dict) -> 'InfradotsConnection':
        return cls(
            hostname=params.get('hostname') or DEFAULT_HOSTNAME,
            token=params['token'],
            validate_certs=params.get('validate_certs', True),
            timeout=params.get('timeout') or DEFAULT_TIMEOUT,
        )


class InfradotsResponse(NamedTuple):
    status: int
    body: str

    def json(self) -> Any:
        try:
            return json.loads(self.body) if self.body else None
        except ValueError as e:
            raise InfradotsSerializationError(f"Error parsing response: {e}")


class InfradotsClient:
    """Thin JSON client bound to one Ansible module invocation"""

    def __init__(self, module, connection: InfradotsConnection):
        if not connection.token:
            raise InfradotsValidationError("Infradots API token is required")
        self.module = module
        self.connection = connection

    def url(self, path: str) -> str:
        return self.connection.base_url + path

    def request(self, method: str, path: str, payload: Optional[dict] = None) -> InfradotsResponse:
        """Issue one request and return its status and raw body.

        Only transport failures raise here; judging the status code is left to
        the caller since every operation accepts a different set.
        """
        url = self.url(path)
        headers = {
            'Authorization': f"Bearer {self.connection.token}",
            'Accept': 'application/json',
        }
        data = None
        if payload is not None:
            headers['Content-Type'] = 'application/json'
            data = json.dumps(payload)

        # fetch_url takes follow_redirects from module.params; the token must
        # never be replayed to a redirect target.
        resp, info = fetch_url(
            self.module,
            url,
            data=data,
            headers=headers,
            method=method,
            timeout=self.connection.timeout,
            unredirected_headers=['Authorization'],
        )
        try:
            status = info.get('status', -1)
            if status == -1:
                raise InfradotsTransportError(
                    f"{method} {url} failed: {info.get('msg', 'unknown error')}"
                )

            if 'body' in info:
                raw = info['body']
            elif resp is not None:
                raw = resp.read()
            else:
                raw = b''
        finally:
            if resp is not None:
                resp.close()

        self.module.debug(f"Infradots API {method} {url} -> {status}")
        return InfradotsResponse(status=status, body=to_text(raw or b'', errors='surrogate_or_strict'))

    def get(self, path: str) -> InfradotsResponse:
        return self.request('GET', path)

    def post(self, path: str, payload: dict) -> InfradotsResponse:
        return self.request('POST', path, payload)

    def patch(self, path: str, payload: dict) -> InfradotsResponse:
        return self.request('PATCH', path, payload)

    def delete(self, path: str) -> InfradotsResponse:
        return self.request('DELETE', path)

    def warn(self, message: str):
        self.module.warn(message)
