# invoicexpress/infrastructure/external/invoicexpress_adapter.py
import logging
import os
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv
from lxml import etree

from invoicexpress import config
from invoicexpress.domain.errors import (
    ConfigurationError,
    NotFound,
    TransportError,
    Unauthorized,
    UnprocessableEntity,
)
from invoicexpress.domain.ports.http_transport import HttpTransport
from invoicexpress.infrastructure.xml.mapper import XmlMapper

load_dotenv()

logger = logging.getLogger(__name__)


class InvoiceXpressAdapter(HttpTransport):
    """
    Adaptador HTTP para la API XML de InvoiceXpress. Cada llamada hace
    exactamente un viaje de red: sin reintentos ni paginación. Los
    códigos de error se traducen a la jerarquía de invoicexpress.domain.errors.
    """

    def __init__(
        self,
        account_name: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        mapper: Optional[XmlMapper] = None,
    ):
        self.account_name = account_name or os.getenv(config.ACCOUNT_NAME_ENV)
        self.api_key = api_key or os.getenv(config.API_KEY_ENV)
        if not all([self.account_name, self.api_key]):
            raise ConfigurationError(
                f"Faltan credenciales de InvoiceXpress ({config.ACCOUNT_NAME_ENV}, {config.API_KEY_ENV})"
            )

        if timeout is None:
            timeout = float(os.getenv(config.TIMEOUT_ENV, config.DEFAULT_TIMEOUT))
        self.timeout = timeout
        self.base_url = config.BASE_URL_TEMPLATE.format(account_name=self.account_name)
        self.session = session or requests.Session()
        self.mapper = mapper or XmlMapper()

    def get(self, path: str, options: Dict[str, Any]) -> Optional[Any]:
        return self._request('GET', path, options)

    def post(self, path: str, options: Dict[str, Any]) -> Optional[Any]:
        return self._request('POST', path, options)

    def put(self, path: str, options: Dict[str, Any]) -> Optional[Any]:
        return self._request('PUT', path, options)

    def _request(self, method: str, path: str, options: Dict[str, Any]) -> Optional[Any]:
        url = self.base_url + path.lstrip('/')
        params = dict(options.get('params') or {})
        params['api_key'] = self.api_key
        headers = {
            'Accept': 'application/xml',
            'Content-Type': config.XML_CONTENT_TYPE,
            'User-Agent': config.USER_AGENT,
        }

        body = options.get('body')
        data = self.mapper.serialize(body) if body is not None else None

        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method, url, params=params, data=data, headers=headers, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(
                f"Error de conexión con InvoiceXpress en {method} {path}: {e}",
                url=url,
                resource_id=options.get('resource_id'),
            ) from e

        logger.debug(f"{method} {url} -> {response.status_code}")
        if not 200 <= response.status_code < 300:
            self._raise_for_status(method, url, response, options.get('resource_id'))

        klass = options.get('klass')
        if klass is None or not response.content or not response.content.strip():
            return None
        return self.mapper.deserialize(response.content, klass)

    def _raise_for_status(self, method: str, url: str, response: requests.Response, resource_id: Optional[str]):
        status = response.status_code
        body = response.content or b""
        common = dict(status_code=status, url=url, resource_id=resource_id, response_body=body)
        logger.warning(f"{method} {url} respondió {status}")

        if status in (401, 403):
            raise Unauthorized(f"No autorizado ({status}) en {method} {url}", **common)
        if status == 404:
            target = f" {resource_id}" if resource_id is not None else ""
            raise NotFound(f"Documento{target} no encontrado en {method} {url}", **common)
        if status == 422:
            errors = self._parse_errors(body)
            raise UnprocessableEntity(
                f"InvoiceXpress rechazó el envío: {'; '.join(errors)}", errors=errors, **common
            )
        raise TransportError(f"Error HTTP {status} en {method} {url}", **common)

    def _parse_errors(self, body: bytes) -> List[str]:
        """Extrae los mensajes de <errors><error>...</error></errors>, tal cual los manda el servidor."""
        text = body.decode('utf-8', errors='replace').strip()
        if not text:
            return []
        try:
            root = etree.fromstring(body)
        except etree.XMLSyntaxError:
            return [text]
        messages = [el.text for el in root.iter('error') if el.text]
        return messages or [text]
