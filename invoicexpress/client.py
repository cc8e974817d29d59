# invoicexpress/client.py
from typing import Any, Dict, Optional

from invoicexpress.application.resources.guides import GuidesResource
from invoicexpress.domain.models.guide import DevolutionGuide, ShippingGuide, TransportGuide
from invoicexpress.domain.ports.http_transport import HttpTransport
from invoicexpress.infrastructure.external.invoicexpress_adapter import InvoiceXpressAdapter


class InvoiceXpressClient:
    """
    Punto de entrada de la librería. Sin `transport`, arma un
    InvoiceXpressAdapter con las credenciales dadas o las del .env.
    """

    def __init__(
        self,
        account_name: Optional[str] = None,
        api_key: Optional[str] = None,
        transport: Optional[HttpTransport] = None,
    ):
        self.transport = transport or InvoiceXpressAdapter(account_name=account_name, api_key=api_key)
        self.transport_guides = GuidesResource(self.transport, TransportGuide, 'transports')
        self.shipping_guides = GuidesResource(self.transport, ShippingGuide, 'shippings')
        self.devolution_guides = GuidesResource(self.transport, DevolutionGuide, 'devolutions')

    # --- GUÍAS DE TRANSPORTE ---

    def transport_guide(self, transport_guide_id, options: Optional[Dict[str, Any]] = None):
        return self.transport_guides.get(transport_guide_id, options)

    def create_transport_guide(self, transport_guide, options: Optional[Dict[str, Any]] = None):
        return self.transport_guides.create(transport_guide, options)

    def update_transport_guide_state(self, transport_guide_id, transport_guide_state, options: Optional[Dict[str, Any]] = None):
        return self.transport_guides.update_state(transport_guide_id, transport_guide_state, options)

    def transport_guide_mail(self, transport_guide_id, message, options: Optional[Dict[str, Any]] = None):
        return self.transport_guides.send_email(transport_guide_id, message, options)

    def transport_guide_pdf_url(self, transport_guide_id, options: Optional[Dict[str, Any]] = None):
        return self.transport_guides.pdf_url(transport_guide_id, options)
