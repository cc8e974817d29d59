# invoicexpress/application/resources/guides.py
from typing import Any, Dict, Optional, Type

from invoicexpress.domain.errors import ArgumentError
from invoicexpress.domain.models.base import XmlModel
from invoicexpress.domain.models.client import Message, Output
from invoicexpress.domain.models.guide import GuideState
from invoicexpress.domain.ports.http_transport import HttpTransport


class GuidesResource:
    """
    Métodos de la API para un tipo de guía (transporte, envío, devolución).
    Cada método hace una sola llamada al transporte; la legalidad de los
    cambios de estado la decide el servidor.
    """

    def __init__(self, transport: HttpTransport, model: Type[XmlModel], path: str):
        self.transport = transport
        self.model = model
        self.path = path

    def _check_type(self, value: Any, expected: type, label: str):
        if not isinstance(value, expected):
            raise ArgumentError(
                f"{label} tiene el tipo incorrecto: se esperaba {expected.__name__}, "
                f"se recibió {type(value).__name__}"
            )

    def _params(self, base: Dict[str, Any], options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        params = dict(base)
        params.update(options or {})
        return params

    def get(self, guide_id, options: Optional[Dict[str, Any]] = None):
        """
        Devuelve toda la información de la guía: datos básicos (fecha,
        estado, número de secuencia), cliente e items.

        Lanza Unauthorized si la api key no es válida y NotFound si la
        guía no existe.
        """
        params = self._params({'klass': self.model, 'resource_id': guide_id}, options)
        return self.transport.get(f"{self.path}/{guide_id}.xml", params)

    def create(self, guide, options: Optional[Dict[str, Any]] = None):
        """
        Crea una guía nueva. Si el cliente no existe (por nombre) se crea
        uno; los items se crean o se actualizan también por nombre. Si el
        nombre del impuesto no existe, el item queda sin impuesto.

        Lanza UnprocessableEntity si el servidor rechaza el envío.
        """
        self._check_type(guide, self.model, 'La guía')
        params = self._params({'klass': self.model, 'body': guide}, options)
        return self.transport.post(f"{self.path}.xml", params)

    def update_state(self, guide_id, state, options: Optional[Dict[str, Any]] = None):
        """
        Cambia el estado de la guía. El estado se envía tal cual: las
        transiciones ilegales las rechaza el servidor con UnprocessableEntity.
        Para cancelar hay que indicar el motivo en `message`.
        """
        self._check_type(state, GuideState, 'El estado de la guía')
        body = state.with_tag(self.model.__xml_tag__)
        params = self._params({'klass': self.model, 'body': body, 'resource_id': guide_id}, options)
        return self.transport.put(f"{self.path}/{guide_id}/change-state.xml", params)

    def send_email(self, guide_id, message, options: Optional[Dict[str, Any]] = None):
        """Envía la guía por correo."""
        self._check_type(message, Message, 'El mensaje')
        params = self._params({'klass': self.model, 'body': message, 'resource_id': guide_id}, options)
        return self.transport.put(f"{self.path}/{guide_id}/email-document.xml", params)

    def pdf_url(self, guide_id, options: Optional[Dict[str, Any]] = None) -> Output:
        params = self._params({'klass': Output, 'resource_id': guide_id}, options)
        return self.transport.get(f"api/pdf/{guide_id}.xml", params)
