"""
Record table models

One DynamoDB table holds every record. Its physical layout is described by
a ``TableSchema`` (key attribute names plus the three secondary indexes) so
that handlers never spell attribute names inline.

- ``Record``: the persisted entity in logical field names
- ``IndexKeys``: the optional secondary index values of a put or update,
  each either absent ("leave unchanged") or set
- ``UpdateRequest``: an ordered list of SET assignments rendered into the
  expression/placeholder triple DynamoDB expects
"""

from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError


# =============================================================================
# Table Metadata Classes
# =============================================================================

class IndexDefinition:
    """Defines a Global Secondary Index of the record table."""
    def __init__(
        self,
        name: str,
        partition_key: str,
        sort_key: Optional[str] = None,
        aliases: Tuple[str, ...] = ()
    ):
        self.name = name
        self.partition_key = partition_key
        self.sort_key = sort_key
        self.aliases = aliases

    def __repr__(self) -> str:
        return f"IndexDefinition(name={self.name!r}, partition_key={self.partition_key!r}, sort_key={self.sort_key!r})"


class TableSchema:
    """Physical attribute names and indexes of the record table."""

    def __init__(
        self,
        partition_key: str,
        sort_key: str,
        attributes_field: str,
        index_fields: Dict[str, str],
        indexes: List[IndexDefinition],
    ):
        """
        Args:
            partition_key: Hash key attribute name
            sort_key: Range key attribute name
            attributes_field: Attribute holding the opaque payload
            index_fields: Logical IndexKeys field name -> physical attribute name
            indexes: Secondary index definitions, in index1..index3 order
        """
        self.partition_key = partition_key
        self.sort_key = sort_key
        self.attributes_field = attributes_field
        self.index_fields = index_fields
        self.indexes = indexes

    def key(self, partition_key: str, sort_key: str) -> Dict[str, str]:
        """Build the primary key of one record."""
        return {self.partition_key: partition_key, self.sort_key: sort_key}

    def get_index(self, name: str) -> IndexDefinition:
        """Look up an index by its table name or one of its aliases.

        Raises:
            ValidationError: If no index matches
        """
        for index in self.indexes:
            if name == index.name or name in index.aliases:
                return index
        available = [index.name for index in self.indexes]
        raise ValidationError(
            f"Unknown index '{name}'. Available indexes: {available}",
            errors={'index_name': name},
        )


RECORD_TABLE = TableSchema(
    partition_key='PK',
    sort_key='SK',
    attributes_field='attributes',
    index_fields={
        'index1_key': 'GSI1PK',
        'index1_sort_key': 'GSI1SK',
        'index2_key': 'GSI2PK',
        'index3_key': 'GSI3PK',
    },
    indexes=[
        IndexDefinition('GSI1', partition_key='GSI1PK', sort_key='GSI1SK', aliases=('index1', 'GSI1PK')),
        IndexDefinition('GSI2PK', partition_key='GSI2PK', aliases=('index2',)),
        IndexDefinition('GSI3PK', partition_key='GSI3PK', aliases=('index3',)),
    ],
)


# =============================================================================
# Partial update value type
# =============================================================================

class IndexKeys(BaseModel):
    """Optional secondary index values supplied with a put or update.

    A field left as ``None`` (or empty) means "do not write it": on a put the
    attribute is omitted from the item, on an update the stored value is
    left untouched. Numeric values (e.g. a venue id ``7``) are stored as
    their text form, since every index key attribute is a string.
    """

    index1_key: Optional[str] = Field(
        None, validation_alias=AliasChoices('index1_key', 'index1Key', 'GSI1PK')
    )
    index1_sort_key: Optional[str] = Field(
        None, validation_alias=AliasChoices('index1_sort_key', 'index1SortKey', 'GSI1SK')
    )
    index2_key: Optional[str] = Field(
        None, validation_alias=AliasChoices('index2_key', 'index2Key', 'GSI2PK')
    )
    index3_key: Optional[str] = Field(
        None, validation_alias=AliasChoices('index3_key', 'index3Key', 'GSI3PK')
    )

    model_config = ConfigDict(extra='forbid', frozen=True)

    @field_validator('index1_key', 'index1_sort_key', 'index2_key', 'index3_key', mode='before')
    @classmethod
    def stringify_numbers(cls, v):
        """Index attributes are string keys; numeric ids are written as text."""
        if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
            return str(v)
        return v

    @classmethod
    def coerce(cls, value: Union['IndexKeys', Mapping[str, Any], None]) -> 'IndexKeys':
        """Accept an IndexKeys, a plain mapping, or None.

        Raises:
            ValidationError: If the mapping holds unknown keys or values that
                are neither text nor numbers
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        try:
            return cls.model_validate(dict(value))
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid index keys: {value}",
                errors={'index_keys': [err['msg'] for err in e.errors()]},
                original_error=e,
            ) from e

    def supplied(self) -> Dict[str, str]:
        """Fields that carry a value, in declaration order."""
        return {
            name: value
            for name, value in self.model_dump().items()
            if value
        }

    def to_attributes(self, schema: TableSchema = RECORD_TABLE) -> Dict[str, str]:
        """Supplied fields keyed by physical attribute name."""
        return {schema.index_fields[name]: value for name, value in self.supplied().items()}


class UpdateRequest:
    """Ordered SET assignments for one UpdateItem call.

    Every assigned attribute gets a ``#name`` placeholder and a ``:name``
    value binding, so reserved words never appear in the expression.
    """

    def __init__(self):
        self._assignments: List[Tuple[str, Any]] = []

    def set(self, attribute: str, value: Any) -> 'UpdateRequest':
        """Append one assignment; returns self for chaining."""
        if any(existing == attribute for existing, _ in self._assignments):
            raise ValidationError(
                f"Attribute '{attribute}' assigned twice in one update",
                errors={'attribute': attribute},
            )
        self._assignments.append((attribute, value))
        return self

    @property
    def attributes(self) -> List[str]:
        return [attribute for attribute, _ in self._assignments]

    def render(self) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        """Render (UpdateExpression, ExpressionAttributeNames, ExpressionAttributeValues)."""
        if not self._assignments:
            raise ValidationError("Update request has no assignments")

        clauses = []
        names = {}
        values = {}
        for attribute, value in self._assignments:
            token = attribute.lower()
            names[f"#{token}"] = attribute
            values[f":{token}"] = value
            clauses.append(f"#{token} = :{token}")

        return "SET " + ", ".join(clauses), names, values

    @classmethod
    def for_record(
        cls,
        attributes: Any,
        index_keys: Optional[IndexKeys] = None,
        schema: TableSchema = RECORD_TABLE,
    ) -> 'UpdateRequest':
        """Replace the payload and set every supplied index field."""
        request = cls().set(schema.attributes_field, attributes)
        if index_keys is not None:
            for attribute, value in index_keys.to_attributes(schema).items():
                request.set(attribute, value)
        return request


# =============================================================================
# Record
# =============================================================================

class Record(BaseModel):
    """A stored record in logical field names."""

    partition_key: str = Field(..., description="Groups related records")
    sort_key: str = Field(..., description="Disambiguates records within a partition")
    attributes: Any = Field(None, description="Opaque business payload")
    index_keys: IndexKeys = Field(default_factory=IndexKeys, description="Secondary index values")

    def to_item(self, schema: TableSchema = RECORD_TABLE) -> Dict[str, Any]:
        """Convert to a DynamoDB item; unset index fields are left out."""
        item = schema.key(self.partition_key, self.sort_key)
        item[schema.attributes_field] = self.attributes
        item.update(self.index_keys.to_attributes(schema))
        return item

    @classmethod
    def from_item(cls, item: Mapping[str, Any], schema: TableSchema = RECORD_TABLE) -> 'Record':
        """Build a Record from a raw DynamoDB item."""
        index_values = {
            name: item[attribute]
            for name, attribute in schema.index_fields.items()
            if attribute in item
        }
        return cls(
            partition_key=item[schema.partition_key],
            sort_key=item[schema.sort_key],
            attributes=item.get(schema.attributes_field),
            index_keys=IndexKeys(**index_values),
        )
