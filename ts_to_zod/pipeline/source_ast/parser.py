"""
TypeScript source parser that builds an AST of type declarations.

Phase 1 of the pipeline: parse the source with tree-sitter and extract the
top-level type declarations (type aliases, interfaces, enums), their export
status and their documentation tags. No translation happens here.
"""

from __future__ import annotations

import re

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser

from ...logging import get_logger
from .jsdoc import JSDocTags, get_jsdoc_comments, normalize_comment, parse_jsdoc_tags
from .nodes import (
    ArrayNode,
    DeclarationNode,
    IntersectionNode,
    LiteralNode,
    ObjectNode,
    PrimitiveNode,
    PropertyDef,
    ReferenceNode,
    SourceAST,
    TupleNode,
    TypeNode,
    UnionNode,
    UnsupportedNode,
)

logger = get_logger("parser")

_ESCAPE = re.compile(r"\\(.)")
_ESCAPED_CHARS = {"n": "\n", "t": "\t", "r": "\r"}


class TsToZodError(Exception):
    """Base class for ts_to_zod errors."""

    pass


class SourceParseError(TsToZodError):
    """Raised when the TypeScript source contains syntax errors."""

    pass


def _unquote(text: str) -> str:
    """Turn a quoted TypeScript string literal into its value."""
    inner = text[1:-1] if len(text) >= 2 and text[0] in "\"'`" else text
    return _ESCAPE.sub(lambda m: _ESCAPED_CHARS.get(m.group(1), m.group(1)), inner)


def _parse_number(text: str) -> int | float:
    try:
        return int(text, 0)
    except ValueError:
        return float(text)


class SourceParser:
    """Parses TypeScript source into a SourceAST."""

    DECLARATION_TYPES = {"type_alias_declaration", "interface_declaration", "enum_declaration"}

    # Type nodes wrapping a single inner type
    WRAPPER_TYPES = {"parenthesized_type", "readonly_type", "type_annotation"}

    def __init__(self, parse_jsdoc: bool = True):
        """
        Initialize the parser.

        Args:
            parse_jsdoc: Whether JSDoc tags are turned into JSDocTags
        """
        self.parse_jsdoc = parse_jsdoc
        self._parser = Parser(Language(ts_typescript.language_typescript()))
        self._source = b""

    def parse(self, source_text: str) -> SourceAST:
        """
        Parse TypeScript source text.

        Args:
            source_text: The TypeScript source

        Returns:
            SourceAST with the top-level type declarations in source order

        Raises:
            SourceParseError: If the source cannot be parsed
        """
        self._source = source_text.encode("utf8")
        tree = self._parser.parse(self._source)

        if tree.root_node.has_error:
            errors = self._find_errors(tree.root_node)
            first_error = errors[0] if errors else tree.root_node
            raise SourceParseError(f"Failed to parse TypeScript source at line {first_error.start_point[0] + 1}: syntax error near '{self._text(first_error)[:50]}'")

        ast = SourceAST()
        for statement in tree.root_node.named_children:
            exported = False
            declaration = statement
            if statement.type == "export_statement":
                declaration = statement.child_by_field_name("declaration")
                exported = True
                if declaration is None:
                    continue

            if declaration.type not in self.DECLARATION_TYPES:
                continue

            # Comments precede the export statement, not the declaration it wraps
            ast.declarations.append(self._parse_declaration(declaration, exported, statement))

        logger.debug("Parsed %d type declarations", len(ast.declarations))
        return ast

    def _find_errors(self, node: Node) -> list[Node]:
        """Find error and missing nodes, in source order."""
        errors = []
        if node.type == "ERROR" or node.is_missing:
            errors.append(node)
        for child in node.children:
            errors.extend(self._find_errors(child))
        return errors

    def _text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf8")

    def _read_jsdoc(self, anchor: Node) -> tuple[JSDocTags, str | None]:
        """Read tags and the retained comment text for a node."""
        comments = get_jsdoc_comments(anchor)
        comment = "\n".join(normalize_comment(c) for c in comments) if comments else None
        tags = parse_jsdoc_tags(comments) if self.parse_jsdoc else JSDocTags()
        return tags, comment

    def _parse_declaration(self, node: Node, exported: bool, anchor: Node) -> DeclarationNode:
        """Parse a type alias, interface or enum declaration."""
        jsdoc, comment = self._read_jsdoc(anchor)
        name_node = node.child_by_field_name("name")

        declaration = DeclarationNode(
            name=self._text(name_node) if name_node else "",
            exported=exported,
            jsdoc=jsdoc,
            comment=comment,
            start_line=node.start_point[0] + 1,
            end_line=node.end_point[0] + 1,
        )

        type_parameters = node.child_by_field_name("type_parameters")
        if type_parameters is not None:
            for parameter in type_parameters.named_children:
                parameter_name = parameter.child_by_field_name("name")
                declaration.type_parameters.append(self._text(parameter_name or parameter))

        if node.type == "type_alias_declaration":
            declaration.kind = "type_alias"
            declaration.body = self.parse_type(node.child_by_field_name("value"))
        elif node.type == "interface_declaration":
            declaration.kind = "interface"
            declaration.body = self.parse_type(node.child_by_field_name("body"))
            for child in node.children:
                if child.type in ("extends_type_clause", "extends_clause"):
                    bases = child.children_by_field_name("type") or child.named_children
                    declaration.extends.extend(self.parse_type(base) for base in bases)
        else:
            declaration.kind = "enum"

        return declaration

    def parse_type(self, node: Node | None) -> TypeNode:
        """
        Parse a type expression node recursively.

        Args:
            node: A tree-sitter node in type position

        Returns:
            Appropriate TypeNode subclass; UnsupportedNode for unknown constructs
        """
        if node is None:
            return PrimitiveNode(type_name="any", source_text="any")

        text = self._text(node)
        node_type = node.type

        if node_type in self.WRAPPER_TYPES:
            inner = node.named_children
            return self.parse_type(inner[0]) if inner else UnsupportedNode(source_text=text, reason=node_type)

        if node_type == "predefined_type":
            return PrimitiveNode(type_name=text, source_text=text)

        if node_type == "type_identifier":
            if text in ("undefined", "null", "bigint"):
                return PrimitiveNode(type_name=text, source_text=text)
            return ReferenceNode(name=text, source_text=text)

        if node_type == "generic_type":
            return self._parse_generic_type(node, text)

        if node_type in ("literal_type", "string", "number", "true", "false", "null", "undefined", "unary_expression"):
            return self._parse_literal_type(node, text)

        if node_type in ("union_type", "intersection_type"):
            members = [self.parse_type(member) for member in self._flatten(node, node_type)]
            if node_type == "union_type":
                return UnionNode(variants=members, source_text=text)
            return IntersectionNode(members=members, source_text=text)

        if node_type == "array_type":
            return ArrayNode(items=self.parse_type(node.named_children[0]), source_text=text)

        if node_type == "tuple_type":
            return TupleNode(items=[self._parse_tuple_member(member) for member in node.named_children], source_text=text)

        if node_type in ("object_type", "interface_body"):
            return self._parse_object_type(node, text)

        logger.debug("Unsupported type construct %s: %s", node_type, text)
        return UnsupportedNode(source_text=text, reason=node_type)

    def _flatten(self, node: Node, node_type: str) -> list[Node]:
        """Flatten left-nested binary type operators (A | B | C)."""
        members = []
        for child in node.named_children:
            if child.type == node_type:
                members.extend(self._flatten(child, node_type))
            elif child.type != "comment":
                members.append(child)
        return members

    def _parse_generic_type(self, node: Node, text: str) -> TypeNode:
        name_node = node.child_by_field_name("name")
        if name_node is None or name_node.type != "type_identifier":
            return UnsupportedNode(source_text=text, reason="qualified generic type")

        arguments = node.child_by_field_name("type_arguments")
        type_arguments = []
        if arguments is not None:
            type_arguments = [self.parse_type(argument) for argument in arguments.named_children if argument.type != "comment"]

        return ReferenceNode(name=self._text(name_node), type_arguments=type_arguments, source_text=text)

    def _parse_literal_type(self, node: Node, text: str) -> TypeNode:
        if node.type == "literal_type" and node.named_children:
            node = node.named_children[0]

        kind = node.type
        if kind == "string":
            return LiteralNode(value=_unquote(text), source_text=text)
        if kind in ("number", "unary_expression"):
            try:
                return LiteralNode(value=_parse_number(text.replace(" ", "")), source_text=text)
            except ValueError:
                return UnsupportedNode(source_text=text, reason="literal expression")
        if kind in ("true", "false"):
            return LiteralNode(value=kind == "true", source_text=text)
        if kind in ("null", "undefined"):
            return PrimitiveNode(type_name=kind, source_text=text)
        return UnsupportedNode(source_text=text, reason=f"{kind} literal")

    def _parse_tuple_member(self, node: Node) -> TypeNode:
        if node.type in ("optional_type", "rest_type", "optional_tuple_parameter"):
            return UnsupportedNode(source_text=self._text(node), reason=node.type)
        if node.type == "tuple_parameter":
            annotation = node.child_by_field_name("type")
            return self.parse_type(annotation)
        return self.parse_type(node)

    def _parse_object_type(self, node: Node, text: str) -> TypeNode:
        """Parse an object type literal or an interface body."""
        obj = ObjectNode(source_text=text)

        for member in node.named_children:
            if member.type == "property_signature":
                obj.properties.append(self._parse_property(member))
            elif member.type == "method_signature":
                name_node = member.child_by_field_name("name")
                obj.properties.append(
                    PropertyDef(
                        name=self._property_name(name_node) if name_node else "",
                        type_node=UnsupportedNode(source_text=self._text(member), reason="method signature"),
                        source_text=self._text(member),
                    )
                )
            elif member.type == "index_signature":
                if any(child.type == "mapped_type_clause" for child in member.children):
                    return UnsupportedNode(source_text=text, reason="mapped type")
                obj.index_value = self.parse_type(member.child_by_field_name("type"))
            elif member.type in ("call_signature", "construct_signature"):
                return UnsupportedNode(source_text=text, reason=member.type)

        return obj

    def _parse_property(self, node: Node) -> PropertyDef:
        """Parse a property signature with its JSDoc tags."""
        jsdoc, comment = self._read_jsdoc(node)
        name_node = node.child_by_field_name("name")
        type_node = node.child_by_field_name("type")

        if name_node is not None and name_node.type == "computed_property_name":
            property_type: TypeNode = UnsupportedNode(source_text=self._text(name_node), reason="computed property name")
        else:
            property_type = self.parse_type(type_node)

        return PropertyDef(
            name=self._property_name(name_node) if name_node else "",
            type_node=property_type,
            is_optional=any(child.type == "?" for child in node.children),
            jsdoc=jsdoc,
            comment=comment,
            source_text=self._text(node),
        )

    def _property_name(self, name_node: Node) -> str:
        text = self._text(name_node)
        if name_node.type == "string":
            return _unquote(text)
        return text
