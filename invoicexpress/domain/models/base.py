# invoicexpress/domain/models/base.py
import inspect
import typing
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, ClassVar, Dict, List, Optional

from pydantic import BaseModel, PrivateAttr

from invoicexpress import config

SCALAR_TYPES = (int, float, str, bool, date, datetime)


def _strftime(value: date, fmt: str) -> str:
    # strftime no rellena con ceros los años < 1000
    return value.strftime(fmt.replace('%Y', f'{value.year:04d}'))


def format_date(value: Optional[date]) -> Optional[str]:
    return _strftime(value, config.DATE_FORMAT) if value is not None else None


def format_date_time(value: Optional[datetime]) -> Optional[str]:
    """
    La API no admite zona horaria: los valores con tzinfo se rechazan
    en lugar de perder el offset en silencio.
    """
    if value is None:
        return None
    if value.tzinfo is not None and value.utcoffset() is not None:
        raise ValueError("la fecha-hora debe ser naive (sin zona horaria)")
    return _strftime(value, config.DATE_TIME_FORMAT)


def parse_date(text: str) -> date:
    """Acepta el formato de la API (dd/mm/yyyy) y, como respaldo, ISO 8601."""
    try:
        return datetime.strptime(text, config.DATE_FORMAT).date()
    except ValueError:
        return date.fromisoformat(text)


def parse_date_time(text: str) -> datetime:
    for fmt in (config.DATE_TIME_FORMAT, config.DATE_FORMAT):
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return datetime.fromisoformat(text)


@dataclass(frozen=True)
class XmlElement:
    """
    Metadatos de un campo que viaja como elemento hijo.
    `on_save` recibe el valor Python y devuelve lo que se escribe;
    `on_load` recibe el texto del elemento y devuelve el valor Python.
    """
    name: Optional[str] = None
    on_save: Optional[Callable[[Any], Any]] = None
    on_load: Optional[Callable[[str], Any]] = None


@dataclass(frozen=True)
class XmlAttribute:
    """Igual que XmlElement, pero el campo viaja como atributo del nodo."""
    name: Optional[str] = None
    on_save: Optional[Callable[[Any], Any]] = None
    on_load: Optional[Callable[[str], Any]] = None


@dataclass(frozen=True)
class FieldSpec:
    name: str
    xml_name: str
    kind: str  # 'attribute', 'element', 'has_one' o 'has_many'
    python_type: type
    on_save: Optional[Callable[[Any], Any]] = None
    on_load: Optional[Callable[[str], Any]] = None


class XmlModel(BaseModel):
    """
    Primitiva de mapeo objeto/XML. Cada subclase declara su tag raíz y
    sus campos; los grupos de campos compartidos (p. ej. BaseGuide) se
    incluyen heredando de ellos, en orden de izquierda a derecha.
    """
    __xml_tag__: ClassVar[str] = ''

    _tag_override: Optional[str] = PrivateAttr(default=None)

    @property
    def xml_tag(self) -> str:
        return self._tag_override or type(self).__xml_tag__

    def with_tag(self, tag: str) -> 'XmlModel':
        """Copia del modelo que se serializa con otro tag raíz."""
        clone = self.model_copy()
        clone._tag_override = tag
        return clone

    @classmethod
    def xml_fields(cls) -> List[FieldSpec]:
        schema = _SCHEMAS.get(cls)
        if schema is None:
            schema = [_build_field_spec(cls, name) for name in _declaration_order(cls, [])]
            _SCHEMAS[cls] = schema
        return schema


_SCHEMAS: Dict[type, List[FieldSpec]] = {}


def _declaration_order(klass: type, names: List[str]) -> List[str]:
    # Primero los grupos incluidos (bases), luego los campos propios
    for base in klass.__bases__:
        if issubclass(base, XmlModel) and base is not XmlModel:
            _declaration_order(base, names)
    for name in inspect.get_annotations(klass):
        if name in klass.model_fields and name not in names:
            names.append(name)
    return names


def _unwrap_optional(annotation: Any) -> Any:
    if typing.get_origin(annotation) is typing.Union:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _build_field_spec(cls: type, name: str) -> FieldSpec:
    info = cls.model_fields[name]
    annotation = _unwrap_optional(info.annotation)
    marker = next((m for m in info.metadata if isinstance(m, (XmlElement, XmlAttribute))), XmlElement())

    if typing.get_origin(annotation) in (list, List):
        (item_type,) = typing.get_args(annotation)
        if not (isinstance(item_type, type) and issubclass(item_type, XmlModel)):
            raise TypeError(f"{cls.__name__}.{name}: solo se soportan listas de modelos XML")
        kind, field_type = 'has_many', item_type
    elif isinstance(annotation, type) and issubclass(annotation, XmlModel):
        kind, field_type = 'has_one', annotation
    elif annotation in SCALAR_TYPES:
        kind, field_type = ('attribute' if isinstance(marker, XmlAttribute) else 'element'), annotation
    else:
        raise TypeError(f"{cls.__name__}.{name}: tipo no soportado {annotation!r}")

    xml_name = marker.name
    if xml_name is None:
        xml_name = field_type.__xml_tag__ if kind == 'has_one' else name

    return FieldSpec(
        name=name,
        xml_name=xml_name,
        kind=kind,
        python_type=field_type,
        on_save=marker.on_save,
        on_load=marker.on_load,
    )
