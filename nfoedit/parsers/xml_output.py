"""DOM nodes used when writing NFO documents.

minidom writes carriage returns in character data, and newlines and tabs in
attribute values, as raw characters. A parser normalizes those on the way
back in (CR becomes LF, attribute whitespace becomes a space), so these
nodes write them as character references instead.
"""

from xml.dom import Node, minidom


def escape_text(text: str) -> str:
    """Escape character data, keeping carriage returns as ``&#13;``."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace('"', "&quot;")
        .replace(">", "&gt;")
        .replace("\r", "&#13;")
    )


def escape_attribute(value: str) -> str:
    """Escape an attribute value, keeping CR, LF and tab as character references."""
    return escape_text(value).replace("\n", "&#10;").replace("\t", "&#9;")


class OutputText(minidom.Text):
    """Text node written with ``escape_text``."""

    def writexml(self, writer, indent="", addindent="", newl=""):
        writer.write(f"{indent}{escape_text(self.data)}{newl}")


class OutputElement(minidom.Element):
    """
    Element written with ``escape_attribute`` for its attributes.

    With ``inline`` set, children are written back to back without
    indentation, so no layout whitespace ends up between them.
    """

    inline = False

    def writexml(self, writer, indent="", addindent="", newl=""):
        writer.write(f"{indent}<{self.tagName}")
        for name, value in self.attributes.items():
            writer.write(f' {name}="{escape_attribute(value)}"')

        if not self.childNodes:
            writer.write(f"/>{newl}")
            return

        writer.write(">")
        single_text = len(self.childNodes) == 1 and self.childNodes[0].nodeType in (
            Node.TEXT_NODE,
            Node.CDATA_SECTION_NODE,
        )
        if self.inline or single_text:
            for child in self.childNodes:
                child.writexml(writer, "", "", "")
        else:
            writer.write(newl)
            for child in self.childNodes:
                child.writexml(writer, indent + addindent, addindent, newl)
            writer.write(indent)
        writer.write(f"</{self.tagName}>{newl}")


def create_element(document: minidom.Document, tag: str, inline: bool = False) -> OutputElement:
    """Create an ``OutputElement`` owned by ``document``."""
    elem = OutputElement(tag)
    elem.ownerDocument = document
    elem.inline = inline
    return elem


def create_text(document: minidom.Document, data: str) -> OutputText:
    """Create an ``OutputText`` node owned by ``document``."""
    node = OutputText()
    node.data = data
    node.ownerDocument = document
    return node
