"""Parsing of import document text into the document model."""

import yaml
from pydantic import ValidationError as PydanticValidationError

from eventcatalog.errors.exceptions import MalformedDocumentError
from eventcatalog.models.imports import ImportDocument

_PLAIN_STRING_TAGS = frozenset(
    {
        "tag:yaml.org,2002:bool",
        "tag:yaml.org,2002:int",
        "tag:yaml.org,2002:float",
        "tag:yaml.org,2002:timestamp",
    }
)


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader that reads every plain scalar except null as text.

    Names such as ``2024``, ``1.5``, ``on`` or ``2024-01-01`` stay strings; integer
    fields of the document model accept the numeric text.
    """


DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _PLAIN_STRING_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def parse_document(text: str) -> ImportDocument:
    """Parse YAML (or JSON) text into an ImportDocument.

    Raises:
        MalformedDocumentError: on a syntax error, a top level that is not a
            mapping, or values of the wrong shape.
    """
    try:
        data = yaml.load(text, Loader=DocumentLoader)
    except yaml.YAMLError as exc:
        raise MalformedDocumentError(f"Document is not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise MalformedDocumentError("Document must be a mapping at the top level")

    try:
        return ImportDocument.model_validate(data)
    except PydanticValidationError as exc:
        problems = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        raise MalformedDocumentError(
            "Document does not match the import structure",
            {"errors": problems},
        ) from exc


def dump_document(document: ImportDocument) -> str:
    """Render a document as YAML text, keys in declaration order."""
    data = document.model_dump(by_alias=True, exclude_none=True)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
