# invoicexpress/domain/errors.py
from typing import List, Optional


class InvoiceXpressError(Exception):
    """Error base de la librería."""


class ConfigurationError(InvoiceXpressError, ValueError):
    """Faltan credenciales o configuración para hablar con la API."""


class ArgumentError(InvoiceXpressError, TypeError):
    """
    Un argumento de un método de recurso no tiene el tipo esperado.
    Se lanza siempre antes de hacer cualquier llamada de red.
    """


class MappingError(InvoiceXpressError):
    """El XML está mal formado o no corresponde al modelo pedido."""


class TransportError(InvoiceXpressError):
    """
    Fallo HTTP genérico. Si la falla es de conexión (sin respuesta),
    `status_code` es None.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        resource_id: Optional[str] = None,
        response_body: bytes = b"",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.url = url
        self.resource_id = resource_id
        self.response_body = response_body or b""


class Unauthorized(TransportError):
    """401 o 403: api key inválida o sin permisos."""


class NotFound(TransportError):
    """404: el documento pedido no existe."""


class UnprocessableEntity(TransportError):
    """422: el servidor rechazó el envío. `errors` trae sus mensajes tal cual."""

    def __init__(self, message: str, errors: Optional[List[str]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = list(errors or [])
