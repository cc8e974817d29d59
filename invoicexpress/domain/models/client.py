# invoicexpress/domain/models/client.py
from typing import Annotated, Optional

from invoicexpress.domain.models.base import XmlElement, XmlModel


class Client(XmlModel):
    """
    Cliente de un documento. Al crear una guía, si el nombre no existe
    en la cuenta el servidor crea uno nuevo.
    """
    __xml_tag__ = 'client'

    id: Optional[int] = None
    name: Optional[str] = None
    code: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    fiscal_id: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None
    observations: Optional[str] = None
    send_options: Optional[int] = None


class Message(XmlModel):
    """Correo para el envío de un documento; el destinatario va en client.email."""
    __xml_tag__ = 'message'

    client: Optional[Client] = None
    subject: Optional[str] = None
    body: Optional[str] = None
    cc: Optional[str] = None
    bcc: Optional[str] = None
    logo: Optional[int] = None


class Output(XmlModel):
    __xml_tag__ = 'output'

    pdf_url: Annotated[Optional[str], XmlElement(name='pdfUrl')] = None
