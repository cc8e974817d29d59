import datetime
from typing import Any, Dict, List, Optional

import pytest

from invoicexpress.domain.models.client import Client
from invoicexpress.domain.models.guide import AddressFrom, AddressTo, Item, Tax, TransportGuide
from invoicexpress.domain.ports.http_transport import HttpTransport


class SpyTransport(HttpTransport):
    """Transporte falso que registra cada llamada y devuelve `result` (o lanza `error`)."""

    def __init__(self, result: Any = None, error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def _record(self, method: str, path: str, options: Dict[str, Any]):
        self.calls.append({'method': method, 'path': path, 'options': options})
        if self.error is not None:
            raise self.error
        return self.result

    def get(self, path, options):
        return self._record('GET', path, options)

    def post(self, path, options):
        return self._record('POST', path, options)

    def put(self, path, options):
        return self._record('PUT', path, options)


class FakeResponse:
    def __init__(self, status_code: int, content: bytes = b""):
        self.status_code = status_code
        self.content = content


class FakeSession:
    """Reemplaza a requests.Session: guarda las peticiones y responde en orden."""

    def __init__(self, *responses: FakeResponse):
        self.responses = list(responses)
        self.requests: List[Dict[str, Any]] = []

    def request(self, method, url, **kwargs):
        self.requests.append({'method': method, 'url': url, **kwargs})
        return self.responses.pop(0)


@pytest.fixture
def spy_transport():
    return SpyTransport()


@pytest.fixture
def transport_guide():
    return TransportGuide(
        id=10,
        date=datetime.date(2024, 3, 5),
        due_date=datetime.date(2024, 4, 5),
        loaded_at=datetime.datetime(2024, 3, 5, 14, 30, 0),
        license_plate='12-AB-34',
        reference='PO-778',
        observations='Frágil',
        retention=2.5,
        tax_exemption='M01',
        sequence_id=3,
        address_from=AddressFrom(detail='Rua A 1', city='Lisboa', postal_code='1000-001', country='Portugal'),
        address_to=AddressTo(detail='Rua B 2', city='Porto', postal_code='4000-001', country='Portugal'),
        client=Client(name='Acme Lda', code='ACME', email='compras@acme.pt'),
        items=[
            Item(
                name='Palete',
                description='Palete de madeira',
                unit_price=10.5,
                quantity=2.0,
                unit='unit',
                tax=Tax(name='IVA23', value=23.0),
                discount=0.0,
            ),
        ],
    )


TRANSPORT_GUIDE_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<transport>
  <id>10</id>
  <status>final</status>
  <archived>false</archived>
  <type>Transport</type>
  <sequence_number>1/A</sequence_number>
  <date>05/03/2024</date>
  <due_date>05/04/2024</due_date>
  <loaded_at>05/03/2024 14:30:00</loaded_at>
  <license_plate>12-AB-34</license_plate>
  <reference>PO-778</reference>
  <observations></observations>
  <retention>2.5</retention>
  <permalink>https://acme.app.invoicexpress.com/documents/abc</permalink>
  <timeline>ignored</timeline>
  <address_from>
    <detail>Rua A 1</detail>
    <city>Lisboa</city>
    <postal_code>1000-001</postal_code>
    <country>Portugal</country>
  </address_from>
  <client>
    <id>501</id>
    <name>Acme Lda</name>
  </client>
  <currency>Euro</currency>
  <items type="array">
    <item>
      <name>Palete</name>
      <unit_price>10.5</unit_price>
      <quantity>2.0</quantity>
      <tax>
        <name>IVA23</name>
        <value>23.0</value>
      </tax>
    </item>
    <item>
      <name>Caixa</name>
      <unit_price>1.0</unit_price>
      <quantity>5.0</quantity>
    </item>
  </items>
  <sum>26.0</sum>
  <discount>0.0</discount>
  <before_taxes>26.0</before_taxes>
  <taxes>4.83</taxes>
  <total>30.83</total>
</transport>
"""
