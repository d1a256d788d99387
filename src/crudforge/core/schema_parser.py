"""
Structural parser for Prisma schema text.

Turns the token stream from :mod:`crudforge.core.lexer` into a
:class:`DataModel`: the models, enums, and composite types declared in the
schema, with every field's kind resolved by name lookup and its attribute
flags (``@id``, ``@unique``, ``@updatedAt``, ``@relation``, ...) decoded.

This is deliberately not a schema compiler: it checks that the syntax is
well formed, that block names are unique, and that every field type names a
scalar, enum, model, view, or composite type. Nothing else is validated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import extract_snippet, make_parse_error
from .lexer import Token, TokenType, tokenize

SCALAR_TYPES = frozenset(
    {
        "String",
        "Boolean",
        "Int",
        "BigInt",
        "Float",
        "Decimal",
        "DateTime",
        "Json",
        "Bytes",
    }
)

UNSUPPORTED_TYPE = "Unsupported"

BLOCK_KEYWORDS = frozenset({"model", "enum", "type", "view", "datasource", "generator"})


@dataclass(frozen=True)
class Identifier:
    """A bare identifier used as an attribute argument (``Cascade``, ``id``)."""

    name: str


@dataclass(frozen=True)
class FunctionCall:
    """A function-call argument such as ``autoincrement()`` or ``dbgenerated("...")``."""

    name: str
    args: tuple[Any, ...] = ()


@dataclass
class Attribute:
    """
    A field (``@``) or block (``@@``) attribute.

    Attributes:
        name: Attribute name, namespaced ones dotted (``db.VarChar``)
        args: Positional arguments
        kwargs: Named arguments
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    name: str
    args: list[Any] = field(default_factory=list)
    kwargs: dict[str, Any] = field(default_factory=dict)
    line: int = 0
    column: int = 0

    def argument(self, name: str, position: int = 0) -> Any:
        """Get an argument by name, falling back to its positional slot."""
        if name in self.kwargs:
            return self.kwargs[name]
        if position < len(self.args):
            return self.args[position]
        return None


@dataclass
class _RawField:
    name: str
    type: str
    is_list: bool
    is_optional: bool
    attributes: list[Attribute]
    documentation: str | None
    line: int
    column: int

    def get_attribute(self, name: str) -> Attribute | None:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None


@dataclass
class _RawBlock:
    keyword: str
    name: str
    fields: list[_RawField]
    values: list[str]
    attributes: list[Attribute]
    documentation: str | None
    line: int
    column: int


@dataclass(frozen=True)
class DatamodelField:
    """One field of a parsed model, with its kind resolved."""

    name: str
    type: str
    kind: str  # "scalar" | "enum" | "object" | "unsupported"
    is_list: bool = False
    is_required: bool = True
    is_id: bool = False
    is_unique: bool = False
    is_read_only: bool = False
    is_generated: bool = False
    is_updated_at: bool = False
    has_default_value: bool = False
    default: Any = None
    documentation: str | None = None
    relation_name: str | None = None
    relation_from_fields: tuple[str, ...] = ()
    relation_to_fields: tuple[str, ...] = ()
    relation_on_delete: str | None = None


@dataclass(frozen=True)
class DatamodelModel:
    """One parsed ``model`` block."""

    name: str
    fields: tuple[DatamodelField, ...]
    documentation: str | None = None
    primary_key: tuple[str, ...] = ()
    db_name: str | None = None


@dataclass(frozen=True)
class DatamodelEnum:
    """One parsed ``enum`` block."""

    name: str
    values: tuple[str, ...]
    documentation: str | None = None


@dataclass(frozen=True)
class DataModel:
    """Structural result of parsing a complete schema."""

    models: tuple[DatamodelModel, ...] = ()
    enums: tuple[DatamodelEnum, ...] = ()
    types: tuple[DatamodelModel, ...] = ()

    def get_model(self, name: str) -> DatamodelModel | None:
        for model in self.models:
            if model.name == name:
                return model
        return None


class SchemaParser:
    """
    Recursive-descent parser over schema tokens.

    Newlines are insignificant: a field ends where the next bare identifier,
    documentation comment, block attribute, or closing brace begins, so
    several fields may share one line.
    """

    def __init__(self, text: str, file: str = "<schema>"):
        self.text = text
        self.file = file
        self.tokens = tokenize(text, file)
        self.pos = 0

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int = 1) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *types: TokenType) -> bool:
        return self.current().type in types

    def expect(self, token_type: TokenType, what: str | None = None) -> Token:
        token = self.current()
        if token.type != token_type:
            expected = what or f"'{token_type.value}'"
            raise self.error(f"Expected {expected}, got {self._describe(token)}", token)
        return self.advance()

    def skip_newlines(self) -> None:
        while self.match(TokenType.NEWLINE):
            self.advance()

    def error(self, message: str, token: Token | None = None):
        token = token or self.current()
        return make_parse_error(
            message,
            self.file,
            token.line,
            token.column,
            extract_snippet(self.text, token.line),
        )

    @staticmethod
    def _describe(token: Token) -> str:
        if token.type == TokenType.EOF:
            return "end of input"
        if token.type == TokenType.NEWLINE:
            return "end of line"
        return repr(token.value)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def parse(self) -> DataModel:
        """Parse the whole schema and resolve field kinds."""
        blocks: list[_RawBlock] = []
        docs: list[str] = []

        while not self.match(TokenType.EOF):
            token = self.current()
            if token.type == TokenType.NEWLINE:
                self.advance()
            elif token.type == TokenType.DOC_COMMENT:
                docs.append(token.value)
                self.advance()
            elif token.type == TokenType.IDENTIFIER and token.value in BLOCK_KEYWORDS:
                blocks.append(self.parse_block(_join_docs(docs)))
                docs = []
            else:
                raise self.error(
                    f"Unexpected {self._describe(token)}; expected one of "
                    + ", ".join(sorted(BLOCK_KEYWORDS)),
                    token,
                )

        return _build_datamodel(blocks, self)

    def parse_block(self, documentation: str | None) -> _RawBlock:
        keyword_token = self.advance()
        keyword = keyword_token.value
        name = self.expect(TokenType.IDENTIFIER, f"{keyword} name").value
        self.skip_newlines()
        self.expect(TokenType.LBRACE)

        block = _RawBlock(
            keyword=keyword,
            name=name,
            fields=[],
            values=[],
            attributes=[],
            documentation=documentation,
            line=keyword_token.line,
            column=keyword_token.column,
        )

        if keyword in ("datasource", "generator"):
            self._parse_config_body()
        elif keyword == "enum":
            self._parse_enum_body(block)
        else:
            self._parse_model_body(block)

        self.expect(TokenType.RBRACE, f"'}}' closing {keyword} {name}")
        return block

    def _parse_config_body(self) -> None:
        while not self.match(TokenType.RBRACE, TokenType.EOF):
            if self.match(TokenType.NEWLINE, TokenType.DOC_COMMENT):
                self.advance()
                continue
            self.expect(TokenType.IDENTIFIER, "setting name")
            self.expect(TokenType.EQUALS)
            self.parse_value()

    def _parse_enum_body(self, block: _RawBlock) -> None:
        while not self.match(TokenType.RBRACE, TokenType.EOF):
            if self.match(TokenType.NEWLINE, TokenType.DOC_COMMENT):
                self.advance()
            elif self.match(TokenType.AT_AT):
                block.attributes.append(self.parse_attribute())
            else:
                block.values.append(self.expect(TokenType.IDENTIFIER, "enum value").value)
                while self.match(TokenType.AT):
                    self.parse_attribute()

    def _parse_model_body(self, block: _RawBlock) -> None:
        docs: list[str] = []
        while not self.match(TokenType.RBRACE, TokenType.EOF):
            token = self.current()
            if token.type == TokenType.NEWLINE:
                self.advance()
            elif token.type == TokenType.DOC_COMMENT:
                docs.append(token.value)
                self.advance()
            elif token.type == TokenType.AT_AT:
                block.attributes.append(self.parse_attribute())
            elif token.type == TokenType.IDENTIFIER:
                block.fields.append(self.parse_field(_join_docs(docs)))
                docs = []
            else:
                raise self.error(
                    f"Unexpected {self._describe(token)} in {block.keyword} {block.name}",
                    token,
                )

    # ------------------------------------------------------------------
    # Fields and attributes
    # ------------------------------------------------------------------

    def parse_field(self, documentation: str | None) -> _RawField:
        name_token = self.expect(TokenType.IDENTIFIER, "field name")
        type_token = self.current()
        if type_token.type != TokenType.IDENTIFIER:
            raise self.error(
                f"Field '{name_token.value}' is missing a type, got {self._describe(type_token)}",
                type_token,
            )
        self.advance()
        type_name = type_token.value

        if type_name == UNSUPPORTED_TYPE and self.match(TokenType.LPAREN):
            self.advance()
            self.expect(TokenType.STRING, "native type string")
            self.expect(TokenType.RPAREN)

        is_list = False
        is_optional = False
        if self.match(TokenType.LBRACKET):
            self.advance()
            self.expect(TokenType.RBRACKET)
            is_list = True
        if self.match(TokenType.QUESTION):
            self.advance()
            is_optional = True

        attributes: list[Attribute] = []
        while self.match(TokenType.AT):
            attributes.append(self.parse_attribute())

        if not self.match(
            TokenType.NEWLINE,
            TokenType.IDENTIFIER,
            TokenType.DOC_COMMENT,
            TokenType.AT_AT,
            TokenType.RBRACE,
            TokenType.EOF,
        ):
            raise self.error(
                f"Unexpected {self._describe(self.current())} after field '{name_token.value}'"
            )

        return _RawField(
            name=name_token.value,
            type=type_name,
            is_list=is_list,
            is_optional=is_optional,
            attributes=attributes,
            documentation=documentation,
            line=name_token.line,
            column=name_token.column,
        )

    def parse_attribute(self) -> Attribute:
        marker = self.advance()  # @ or @@
        name = self.expect(TokenType.IDENTIFIER, "attribute name").value
        while self.match(TokenType.DOT):
            self.advance()
            name += "." + self.expect(TokenType.IDENTIFIER, "attribute name").value

        attribute = Attribute(name=name, line=marker.line, column=marker.column)
        if self.match(TokenType.LPAREN):
            self.advance()
            self._parse_arguments(attribute.args, attribute.kwargs, TokenType.RPAREN)
            self.expect(TokenType.RPAREN)
        return attribute

    def _parse_arguments(
        self,
        args: list[Any],
        kwargs: dict[str, Any],
        closing: TokenType,
    ) -> None:
        self.skip_newlines()
        while not self.match(closing, TokenType.EOF):
            if self.match(TokenType.IDENTIFIER) and self.peek().type == TokenType.COLON:
                key = self.advance().value
                self.advance()
                kwargs[key] = self.parse_value()
            else:
                args.append(self.parse_value())
            self.skip_newlines()
            if self.match(TokenType.COMMA):
                self.advance()
                self.skip_newlines()
            elif not self.match(closing):
                raise self.error(f"Expected ',' or '{closing.value}'")

    def parse_value(self) -> Any:
        """Parse one attribute argument or setting value."""
        token = self.current()
        if token.type == TokenType.STRING:
            self.advance()
            return token.value
        if token.type == TokenType.NUMBER:
            self.advance()
            try:
                return float(token.value) if "." in token.value else int(token.value)
            except ValueError:
                raise self.error(f"Invalid number {token.value!r}", token) from None
        if token.type == TokenType.LBRACKET:
            self.advance()
            items: list[Any] = []
            self._parse_arguments(items, {}, TokenType.RBRACKET)
            self.expect(TokenType.RBRACKET)
            return items
        if token.type == TokenType.IDENTIFIER:
            self.advance()
            name = token.value
            while self.match(TokenType.DOT):
                self.advance()
                name += "." + self.expect(TokenType.IDENTIFIER).value
            if self.match(TokenType.LPAREN):
                self.advance()
                call_args: list[Any] = []
                self._parse_arguments(call_args, {}, TokenType.RPAREN)
                self.expect(TokenType.RPAREN)
                return FunctionCall(name=name, args=tuple(call_args))
            if name in ("true", "false"):
                return name == "true"
            return Identifier(name)
        raise self.error(f"Expected a value, got {self._describe(token)}", token)


def _join_docs(docs: list[str]) -> str | None:
    return "\n".join(docs) if docs else None


def _names(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item.name for item in value if isinstance(item, Identifier))


def _build_datamodel(blocks: list[_RawBlock], parser: SchemaParser) -> DataModel:
    """Resolve field kinds and relation metadata across all blocks."""
    seen: dict[str, _RawBlock] = {}
    for block in blocks:
        if block.keyword in ("datasource", "generator"):
            continue
        if block.name in seen:
            raise make_parse_error(
                f"The {block.keyword} '{block.name}' is declared more than once "
                f"(first declared on line {seen[block.name].line})",
                parser.file,
                block.line,
                block.column,
                extract_snippet(parser.text, block.line),
            )
        seen[block.name] = block

    enum_names = {b.name for b in blocks if b.keyword == "enum"}
    model_names = {b.name for b in blocks if b.keyword in ("model", "view")}
    type_names = {b.name for b in blocks if b.keyword == "type"}

    models: list[DatamodelModel] = []
    types: list[DatamodelModel] = []
    enums: list[DatamodelEnum] = []

    for block in blocks:
        if block.keyword == "enum":
            enums.append(
                DatamodelEnum(
                    name=block.name,
                    values=tuple(block.values),
                    documentation=block.documentation,
                )
            )
        elif block.keyword in ("model", "type"):
            built = _build_model(block, enum_names, model_names, type_names, parser)
            (models if block.keyword == "model" else types).append(built)

    return DataModel(models=tuple(models), enums=tuple(enums), types=tuple(types))


def _build_model(
    block: _RawBlock,
    enum_names: set[str],
    model_names: set[str],
    type_names: set[str],
    parser: SchemaParser,
) -> DatamodelModel:
    primary_key: tuple[str, ...] = ()
    db_name = None
    for attribute in block.attributes:
        if attribute.name == "id":
            primary_key = _names(attribute.argument("fields"))
        elif attribute.name == "map":
            db_name = attribute.argument("name")

    foreign_keys: set[str] = set()
    for raw in block.fields:
        relation = raw.get_attribute("relation")
        if relation is not None:
            foreign_keys.update(_names(relation.kwargs.get("fields")))

    fields = []
    for raw in block.fields:
        if raw.type in SCALAR_TYPES:
            kind = "scalar"
        elif raw.type == UNSUPPORTED_TYPE:
            kind = "unsupported"
        elif raw.type in enum_names:
            kind = "enum"
        elif raw.type in model_names or raw.type in type_names:
            kind = "object"
        else:
            raise make_parse_error(
                f'Type "{raw.type}" is neither a built-in type, nor refers to '
                "another model, composite type, or enum.",
                parser.file,
                raw.line,
                raw.column,
                extract_snippet(parser.text, raw.line),
            )

        default_attr = raw.get_attribute("default")
        relation_name = None
        from_fields: tuple[str, ...] = ()
        to_fields: tuple[str, ...] = ()
        on_delete = None
        relation = raw.get_attribute("relation")
        if relation is not None:
            explicit = relation.argument("name")
            relation_name = explicit if isinstance(explicit, str) else None
            from_fields = _names(relation.kwargs.get("fields"))
            to_fields = _names(relation.kwargs.get("references"))
            action = relation.kwargs.get("onDelete")
            on_delete = action.name if isinstance(action, Identifier) else None
        if kind == "object" and raw.type in model_names and relation_name is None:
            first, second = sorted((block.name, raw.type))
            relation_name = f"{first}To{second}"

        fields.append(
            DatamodelField(
                name=raw.name,
                type=raw.type,
                kind=kind,
                is_list=raw.is_list,
                is_required=not raw.is_optional,
                is_id=raw.get_attribute("id") is not None,
                is_unique=raw.get_attribute("unique") is not None,
                is_read_only=kind == "scalar" and raw.name in foreign_keys,
                is_generated=False,
                is_updated_at=raw.get_attribute("updatedAt") is not None,
                has_default_value=default_attr is not None,
                default=default_attr.argument("value") if default_attr else None,
                documentation=raw.documentation,
                relation_name=relation_name,
                relation_from_fields=from_fields,
                relation_to_fields=to_fields,
                relation_on_delete=on_delete,
            )
        )

    return DatamodelModel(
        name=block.name,
        fields=tuple(fields),
        documentation=block.documentation,
        primary_key=primary_key,
        db_name=db_name if isinstance(db_name, str) else None,
    )


def parse_datamodel(text: str, file: str = "<schema>") -> DataModel:
    """
    Parse schema text into its structural data model.

    Args:
        text: Complete schema text
        file: Source label used in error messages

    Returns:
        DataModel with models, enums, and composite types in declaration order

    Raises:
        SchemaParseError: If the text is not a well-formed schema
    """
    return SchemaParser(text, file).parse()
