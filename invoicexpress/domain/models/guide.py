# invoicexpress/domain/models/guide.py
import datetime
from typing import Annotated, List, Optional

from pydantic import Field

from invoicexpress.domain.models.base import (
    XmlAttribute,
    XmlElement,
    XmlModel,
    format_date,
    format_date_time,
    parse_date,
    parse_date_time,
)
from invoicexpress.domain.models.client import Client

# Estados que se pueden pedir en change-state. La API valida la transición:
#   draft -> final (finalized), draft -> deleted (deleted),
#   settled -> final (unsettled), final -> second copy (second_copy),
#   final/second copy -> canceled (canceled), final/second copy -> settled (settled)
# Cancelar exige un mensaje con el motivo.
STATE_FINALIZED = 'finalized'
STATE_DELETED = 'deleted'
STATE_UNSETTLED = 'unsettled'
STATE_SECOND_COPY = 'second_copy'
STATE_CANCELED = 'canceled'
STATE_SETTLED = 'settled'

GUIDE_STATES = (
    STATE_FINALIZED,
    STATE_DELETED,
    STATE_UNSETTLED,
    STATE_SECOND_COPY,
    STATE_CANCELED,
    STATE_SETTLED,
)


class Tax(XmlModel):
    __xml_tag__ = 'tax'

    id: Optional[int] = None
    name: Optional[str] = None
    value: Optional[float] = None
    region: Optional[str] = None
    default_tax: Optional[int] = None


class Item(XmlModel):
    """Línea de documento. Si el nombre ya existe, el servidor actualiza el item."""
    __xml_tag__ = 'item'

    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    unit_price: Optional[float] = None
    quantity: Optional[float] = None
    unit: Optional[str] = None
    tax: Optional[Tax] = None
    discount: Optional[float] = None


def _array_marker(value):
    return 'array'


class Items(XmlModel):
    __xml_tag__ = 'items'

    type: Annotated[Optional[str], XmlAttribute(on_save=_array_marker)] = 'array'
    items: List[Item] = Field(default_factory=list)


def _wrap_items(value):
    return Items(items=value or [])


class AddressFrom(XmlModel):
    __xml_tag__ = 'address_from'

    detail: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


class AddressTo(XmlModel):
    __xml_tag__ = 'address_to'

    detail: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


class BaseGuide(XmlModel):
    """Campos comunes a todas las guías, necesarios para crear/actualizar."""

    id: Optional[int] = None
    date: Annotated[Optional[datetime.date], XmlElement(on_save=format_date, on_load=parse_date)] = None
    due_date: Annotated[Optional[datetime.date], XmlElement(on_save=format_date, on_load=parse_date)] = None
    loaded_at: Annotated[
        Optional[datetime.datetime], XmlElement(on_save=format_date_time, on_load=parse_date_time)
    ] = None
    license_plate: Optional[str] = None
    reference: Optional[str] = None
    observations: Optional[str] = None
    retention: Optional[float] = None
    tax_exemption: Optional[str] = None
    sequence_id: Optional[int] = None

    address_from: Optional[AddressFrom] = None
    address_to: Optional[AddressTo] = None
    client: Optional[Client] = None
    items: Annotated[List[Item], XmlElement(on_save=_wrap_items)] = Field(default_factory=list)


class ExtraGuide(XmlModel):
    """Campos que solo llegan en las respuestas (GET)."""

    status: Optional[str] = None
    archived: Optional[bool] = None
    type: Optional[str] = None
    sequence_number: Optional[str] = None
    permalink: Optional[str] = None
    currency: Optional[str] = None
    sum: Optional[float] = None
    discount: Optional[float] = None
    before_taxes: Optional[float] = None
    taxes: Optional[float] = None
    total: Optional[float] = None


class TransportGuide(BaseGuide, ExtraGuide):
    __xml_tag__ = 'transport'


class ShippingGuide(BaseGuide, ExtraGuide):
    __xml_tag__ = 'shipping'


class DevolutionGuide(BaseGuide, ExtraGuide):
    __xml_tag__ = 'devolution'


class GuideState(XmlModel):
    """
    Comando para cambiar el estado de una guía. El tag raíz es el de la
    guía a la que se aplica; el recurso lo ajusta con `with_tag`.
    """
    __xml_tag__ = 'transport'

    state: Optional[str] = None
    message: Optional[str] = None
