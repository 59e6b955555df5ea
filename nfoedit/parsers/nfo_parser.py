"""Base NFO parser with XML utilities."""

from pathlib import Path
from typing import Any, Generic, Optional, Type, TypeVar
from xml.dom import minidom
from xml.dom.minidom import Element
from xml.parsers.expat import ExpatError

import structlog
from pydantic import BaseModel

from ..common.config import NFOConfig
from .nodes import Compound, from_element
from .schema import XML_DECLARATION

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class NFOParser(Generic[T]):
    """
    Base class for NFO document parsing and writing.

    Decoding is tolerant: malformed markup or an unexpected root element
    yields an empty model instead of an exception. Encoding produces a
    deterministic, pretty-printed document.
    """

    def __init__(
        self,
        model_class: Type[T],
        root_element: str,
        config: Optional[NFOConfig] = None,
    ):
        """
        Initialize parser.

        Args:
            model_class: Pydantic model class for validation
            root_element: Root XML element name (e.g., "movie")
            config: Output formatting options (default: NFOConfig())
        """
        self.model_class = model_class
        self.root_element = root_element
        self.config = config or NFOConfig()
        self.logger = logger.bind(parser=self.__class__.__name__)

    def empty(self) -> T:
        """Return the model with every field absent."""
        return self.model_class()

    def parse_file(self, file_path: Path) -> T:
        """
        Parse NFO file and return validated model.

        Args:
            file_path: Path to NFO file

        Returns:
            Validated Pydantic model instance (empty if the content is not
            a valid document)

        Raises:
            FileNotFoundError: If file doesn't exist
            UnicodeDecodeError: If the file is not UTF-8
        """
        self.logger.info("parsing_nfo_file", file_path=str(file_path))

        model = self.parse_string(Path(file_path).read_text(encoding="utf-8-sig"))

        self.logger.info("nfo_file_parsed", file_path=str(file_path))
        return model

    def parse_string(self, xml_string: str) -> T:
        """
        Parse NFO from XML string.

        Args:
            xml_string: XML content as string

        Returns:
            Validated Pydantic model instance. Empty input, malformed XML and
            a wrong root element all return ``self.empty()``.
        """
        try:
            document = minidom.parseString(xml_string)
        except (ExpatError, ValueError) as e:
            self.logger.warning("nfo_parse_failed", error=str(e))
            return self.empty()

        root = document.documentElement
        if root is None or root.tagName != self.root_element:
            self.logger.warning(
                "nfo_unexpected_root",
                expected=self.root_element,
                actual=root.tagName if root is not None else None,
            )
            return self.empty()

        node = from_element(root)
        if not isinstance(node, Compound):
            # Root with text only (or nothing) carries no fields
            return self.empty()

        data = self._xml_to_dict(node)
        return self.model_class.model_validate(data)

    def write_file(self, model: T, file_path: Path, create_dirs: bool = True) -> None:
        """
        Write model to NFO file with pretty-printing.

        Args:
            model: Pydantic model instance
            file_path: Output file path
            create_dirs: Create parent directories if they don't exist
        """
        file_path = Path(file_path)
        self.logger.info("writing_nfo_file", file_path=str(file_path))

        if create_dirs:
            file_path.parent.mkdir(parents=True, exist_ok=True)

        xml_string = self.to_xml_string(model)

        with open(file_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(xml_string)

        self.logger.info("nfo_file_written", file_path=str(file_path))

    def to_xml_string(self, model: T, pretty: Optional[bool] = None) -> str:
        """
        Convert model to XML string.

        Args:
            model: Pydantic model instance
            pretty: Enable pretty-printing (default: ``config.pretty``)

        Returns:
            XML string with declaration
        """
        if pretty is None:
            pretty = self.config.pretty

        # Absent fields are dropped; False booleans and empty strings are kept
        data = model.model_dump(exclude_none=True)

        document = minidom.Document()
        root = document.createElement(self.root_element)
        document.appendChild(root)
        self._dict_to_xml(root, data)

        if not root.hasChildNodes():
            # Empty text child renders <movie></movie> instead of <movie/>
            root.appendChild(document.createTextNode(""))

        if pretty:
            body = root.toprettyxml(indent=" " * self.config.indent)
        else:
            body = root.toxml() + "\n"

        return XML_DECLARATION + "\n" + body

    def update_field(self, model: T, field_name: str, value: Any) -> T:
        """
        Update a single field and return new validated model.

        Args:
            model: Current model instance
            field_name: Field name to update
            value: New value

        Returns:
            New model instance with updated field

        Raises:
            ValueError: If field_name is not a model field
            ValidationError: If update fails validation
        """
        if field_name not in self.model_class.model_fields:
            raise ValueError(f"Unknown field: {field_name}")

        self.logger.debug("updating_field", field=field_name)

        data = model.model_dump()
        data[field_name] = value

        return self.model_class.model_validate(data)

    def _xml_to_dict(self, root: Compound) -> dict:
        """
        Convert the parsed root element to a dictionary of model fields.

        Subclasses must override for custom behavior.
        """
        raise NotImplementedError("Subclasses must implement _xml_to_dict")

    def _dict_to_xml(self, parent: Element, data: dict) -> None:
        """
        Convert dictionary to XML elements appended to ``parent``.

        Subclasses must override for custom behavior.
        """
        raise NotImplementedError("Subclasses must implement _dict_to_xml")
