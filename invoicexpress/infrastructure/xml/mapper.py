# invoicexpress/infrastructure/xml/mapper.py
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from lxml import etree
from pydantic import ValidationError

from invoicexpress import config
from invoicexpress.domain.errors import MappingError
from invoicexpress.domain.models.base import (
    FieldSpec,
    XmlModel,
    format_date,
    format_date_time,
    parse_date,
    parse_date_time,
)

M = TypeVar('M', bound=XmlModel)

_TRUE_VALUES = {'true', '1'}
_FALSE_VALUES = {'false', '0'}


class XmlMapper:
    """
    Mapeador genérico objeto/XML. Recorre los campos declarados de cada
    modelo (ver XmlModel.xml_fields) en orden y no guarda estado entre
    llamadas, así que una misma instancia se puede compartir entre hilos.
    """

    # --- SERIALIZACIÓN ---

    def serialize(self, instance: XmlModel) -> bytes:
        root = self.to_element(instance)
        return etree.tostring(root, xml_declaration=True, encoding=config.XML_ENCODING)

    def to_element(self, instance: XmlModel, tag: Optional[str] = None) -> etree._Element:
        element = etree.Element(tag or instance.xml_tag)

        for spec in type(instance).xml_fields():
            try:
                self._write_field(element, instance, spec)
            except ValueError as e:
                # lxml rechaza caracteres de control; on_save rechaza valores no representables
                raise MappingError(
                    f"No se pudo serializar el campo '{spec.name}' de {type(instance).__name__}: {e}"
                ) from e

        return element

    def _write_field(self, element: etree._Element, instance: XmlModel, spec: FieldSpec):
        value = getattr(instance, spec.name)
        if spec.on_save is not None:
            value = spec.on_save(value)
        if value is None:
            return

        if spec.kind == 'attribute':
            element.set(spec.xml_name, self._to_text(value))
        elif isinstance(value, XmlModel):
            # has_one, o un has_many que on_save envolvió en un contenedor (Items)
            nested_tag = spec.xml_name if spec.kind == 'has_one' else None
            element.append(self.to_element(value, nested_tag))
        elif spec.kind == 'has_many':
            for item in value:
                element.append(self.to_element(item))
        else:
            child = etree.SubElement(element, spec.xml_name)
            child.text = self._to_text(value)

    def _to_text(self, value: Any) -> str:
        if isinstance(value, bool):
            return 'true' if value else 'false'
        if isinstance(value, datetime):
            return format_date_time(value)
        if isinstance(value, date):
            return format_date(value)
        return str(value)

    # --- DESERIALIZACIÓN ---

    def deserialize(self, document: Union[bytes, str], model_type: Type[M]) -> M:
        if isinstance(document, str):
            document = document.encode('utf-8')
        try:
            tree = etree.fromstring(document)
        except etree.XMLSyntaxError as e:
            raise MappingError(f"XML mal formado para {model_type.__name__}: {e}") from e

        root_tag = model_type.__xml_tag__
        root = tree if tree.tag == root_tag else tree.find(f'.//{root_tag}')
        if root is None:
            raise MappingError(f"No se encontró el tag <{root_tag}> para {model_type.__name__}")

        return self.from_element(root, model_type)

    def from_element(self, element: etree._Element, model_type: Type[M]) -> M:
        values: Dict[str, Any] = {}

        for spec in model_type.xml_fields():
            if spec.kind == 'attribute':
                raw = element.get(spec.xml_name)
                if raw is not None:
                    values[spec.name] = self._coerce(raw, spec, model_type)
            elif spec.kind == 'has_one':
                child = element.find(spec.xml_name)
                if child is not None:
                    values[spec.name] = self.from_element(child, spec.python_type)
            elif spec.kind == 'has_many':
                values[spec.name] = [
                    self.from_element(child, spec.python_type)
                    for child in self._repeated_children(element, spec)
                ]
            else:
                child = element.find(spec.xml_name)
                if child is None:
                    continue
                text = child.text or ''
                if spec.python_type is str and spec.on_load is None:
                    # el texto viaja tal cual, espacios y cadena vacía incluidos
                    values[spec.name] = text
                elif text.strip():
                    values[spec.name] = self._coerce(text.strip(), spec, model_type)

        try:
            return model_type.model_validate(values)
        except ValidationError as e:
            raise MappingError(f"No se pudo construir {model_type.__name__}: {e}") from e

    def _repeated_children(self, element: etree._Element, spec: FieldSpec) -> List[etree._Element]:
        # <items type="array"><item/>...</items> o los <item/> directamente bajo el padre
        item_tag = spec.python_type.__xml_tag__
        container = element.find(spec.xml_name) if spec.xml_name != element.tag else None
        if container is not None:
            return container.findall(item_tag)
        return element.findall(item_tag)

    def _coerce(self, text: str, spec: FieldSpec, model_type: type) -> Any:
        try:
            if spec.on_load is not None:
                return spec.on_load(text)
            return self._coerce_scalar(text, spec.python_type)
        except (TypeError, ValueError) as e:
            raise MappingError(
                f"Valor inválido {text!r} en el campo '{spec.name}' de {model_type.__name__}: {e}"
            ) from e

    def _coerce_scalar(self, text: str, python_type: type) -> Any:
        if python_type is bool:
            lowered = text.lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
            raise ValueError("se esperaba un booleano")
        if python_type is int:
            return int(text)
        if python_type is float:
            return float(text)
        if python_type is datetime:
            return parse_date_time(text)
        if python_type is date:
            return parse_date(text)
        return text
