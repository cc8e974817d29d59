# invoicexpress/domain/ports/http_transport.py
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class HttpTransport(ABC):
    """
    Puerto para las llamadas HTTP a la API de InvoiceXpress.
    `options` admite:
      - 'klass': modelo con el que se parsea la respuesta.
      - 'body': modelo que se serializa como cuerpo (solo POST/PUT).
      - 'resource_id': id del documento, se copia en los errores.
      - 'params': parámetros extra de query string.
    """

    @abstractmethod
    def get(self, path: str, options: Dict[str, Any]) -> Optional[Any]:
        pass

    @abstractmethod
    def post(self, path: str, options: Dict[str, Any]) -> Optional[Any]:
        pass

    @abstractmethod
    def put(self, path: str, options: Dict[str, Any]) -> Optional[Any]:
        pass
