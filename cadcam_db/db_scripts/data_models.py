##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################

"""
This module houses dataclasses that define the format of the data
that's stored in the CADCAM DB store.

Every entity field carries a [`FieldSpec`][db_scripts.data_models.FieldSpec] in its
dataclass metadata. A `FieldSpec` records the wire name, value type, nullability, and
whether the field is a flexible JSON field. The schema registry, the partial update
builder, and the stores are all driven from these specs so the rules live in one place.
"""

import json
import logging
from abc import ABC
from dataclasses import Field, dataclass, field
from dataclasses import fields as dataclass_fields
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type, TypeVar

from cadcam_db.common.enums import FieldType
from cadcam_db.utils import snake_to_camel


LOG = logging.getLogger("cadcam_db")
T = TypeVar("T", bound="BaseDataModel")

SYSTEM_FIELDS = ("id", "created_at", "updated_at")


@dataclass(frozen=True)
class FieldSpec:  # pylint: disable=too-many-instance-attributes
    """
    Metadata for a single entity field.

    Attributes:
        attribute: The Python attribute and store column name (snake_case).
        name: The wire name used in requests and responses (camelCase).
        field_type: The kind of value this field holds.
        required: Whether the field must be supplied on creation.
        nullable: Whether the field accepts an explicit null.
        default: The value applied on creation when the field is omitted.
        relation: Whether this is an ownership or scoping reference. Relations are
            part of the create schema but not the base schema.
        updatable: Whether the field appears in the update schema.
        unique: Whether the store enforces uniqueness of the field's value.
    """

    attribute: str
    name: str
    field_type: FieldType
    required: bool = False
    nullable: bool = True
    default: Any = None
    relation: bool = False
    updatable: bool = True
    unique: bool = False

    @property
    def is_flexible(self) -> bool:
        """Whether this field is a flexible JSON field persisted as encoded text."""
        return self.field_type == FieldType.JSON

    @property
    def is_required_flexible(self) -> bool:
        """Whether this is a flexible JSON field that may never be stored as null."""
        return self.is_flexible and not self.nullable

    def default_value(self) -> Any:
        """
        Get a fresh copy of this field's creation default.

        Returns:
            The default value; mutable defaults are copied so callers can't share them.
        """
        if isinstance(self.default, (list, dict)):
            return type(self.default)(self.default)
        return self.default


def entity_field(  # pylint: disable=too-many-arguments
    field_type: FieldType,
    required: bool = False,
    nullable: bool = True,
    default: Any = None,
    relation: bool = False,
    updatable: bool = True,
    unique: bool = False,
    alias: Optional[str] = None,
) -> Field:
    """
    Declare a dataclass field for an entity model together with its `FieldSpec` options.

    Args:
        field_type: The kind of value this field holds.
        required: Whether the field must be supplied on creation.
        nullable: Whether the field accepts an explicit null.
        default: The creation default when the field is omitted.
        relation: Whether this is an ownership or scoping reference.
        updatable: Whether the field appears in the update schema.
        unique: Whether the store enforces uniqueness.
        alias: The wire name, when it is not the camelCase form of the attribute.

    Returns:
        A dataclass `Field` whose metadata holds the `FieldSpec`.
    """
    metadata = {
        "spec": {
            "field_type": field_type,
            "required": required,
            "nullable": nullable,
            "default": default,
            "relation": relation,
            "updatable": updatable,
            "unique": unique,
            "alias": alias,
        }
    }
    if isinstance(default, (list, dict)):
        return field(default_factory=lambda: type(default)(default), metadata=metadata)
    return field(default=default, metadata=metadata)


@dataclass
class BaseDataModel(ABC):
    """
    A base class for entity dataclasses that provides conversion to and from the
    wire format (camelCase keys) and access to the entity's field specs.

    Attributes:
        id: The store-generated unique id of the entity.
        created_at: When the entity was created. Set by the store.
        updated_at: When the entity was last changed. Set by the store.
        entity_kind: The snake_case kind of the entity (class variable).
        display_name: The PascalCase name used in messages (class variable).
        scoping_key: The attribute used to narrow collection listings, if any (class variable).

    Methods:
        to_dict: Convert the dataclass instance to a wire-format dictionary.
        to_json: Serialize the dataclass instance to a JSON string.
        from_dict: Create an instance of the dataclass from a dictionary.
        from_json: Create an instance of the dataclass from a JSON string.
        get_instance_fields: Retrieve the dataclass fields of this instance.
        get_class_fields: Retrieve the dataclass fields of the class.
        get_field_specs: Retrieve the `FieldSpec` of every entity field.
    """

    id: str = None  # pylint: disable=invalid-name
    created_at: datetime = None
    updated_at: datetime = None

    entity_kind: ClassVar[str] = None
    display_name: ClassVar[str] = None
    scoping_key: ClassVar[Optional[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the dataclass to a dictionary keyed by wire names.

        Returns:
            The dataclass as a dictionary. Datetimes are left as `datetime` objects.
        """
        result = {"id": self.id}
        for spec in self.get_field_specs():
            result[spec.name] = getattr(self, spec.attribute)
        result["createdAt"] = self.created_at
        result["updatedAt"] = self.updated_at
        return result

    def to_json(self) -> str:
        """
        Serialize the dataclass to a JSON string. Datetimes are written in ISO-8601 format.

        Returns:
            The dataclass as a JSON string.
        """
        return json.dumps(self.to_dict(), default=json_default)

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """
        Create an instance of the dataclass from a dictionary.

        Keys may be either wire names (`projectId`) or attribute names (`project_id`).
        Keys that match no field are ignored.

        Args:
            data: A dictionary to turn into an instance of this dataclass.

        Returns:
            An instance of the dataclass that called this.
        """
        by_name = {spec.name: spec.attribute for spec in cls.get_field_specs()}
        by_name.update({"id": "id", "createdAt": "created_at", "updatedAt": "updated_at"})
        attributes = {field_obj.name for field_obj in cls.get_class_fields()}

        kwargs = {}
        for key, val in data.items():
            attribute = by_name.get(key, key)
            if attribute in attributes:
                kwargs[attribute] = val
            else:
                LOG.debug(f"Ignoring unknown key '{key}' for {cls.__name__}.")
        return cls(**kwargs)

    @classmethod
    def from_json(cls: Type[T], json_str: str) -> T:
        """
        Create an instance of the dataclass from a JSON string.

        Args:
            json_str: A JSON string to turn into an instance of this dataclass.

        Returns:
            An instance of the dataclass that called this.
        """
        return cls.from_dict(json.loads(json_str))

    def get_instance_fields(self) -> Tuple[Field]:
        """
        Get the fields associated with this instance.

        Returns:
            A tuple of dataclass.Field objects representing the fields in this data class.
        """
        return dataclass_fields(self)

    @classmethod
    def get_class_fields(cls) -> Tuple[Field]:
        """
        Get the fields associated with this object.

        Returns:
            A tuple of dataclass.Field objects representing the fields in this data class.
        """
        return dataclass_fields(cls)

    @classmethod
    def get_field_specs(cls) -> Tuple[FieldSpec, ...]:
        """
        Get the spec of every entity field (system fields excluded), in declaration order.

        Returns:
            A tuple of `FieldSpec` objects.
        """
        specs = []
        for field_obj in cls.get_class_fields():
            options = field_obj.metadata.get("spec")
            if options is None:
                continue
            options = dict(options)
            alias = options.pop("alias")
            specs.append(FieldSpec(attribute=field_obj.name, name=alias or snake_to_camel(field_obj.name), **options))
        return tuple(specs)


def json_default(value: Any) -> Any:
    """Serialize values the `json` module can't handle natively."""
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


@dataclass
class UserModel(BaseDataModel):
    """
    A dataclass to store the information for a user.

    Attributes:
        name (str): The user's display name.
        email (str): The user's email address. Unique across users.
        email_verified (datetime): When the email address was verified. Set on creation only.
        image (str): A URL to the user's avatar.
        password (str): The user's password hash.
    """

    entity_kind: ClassVar[str] = "user"
    display_name: ClassVar[str] = "User"

    name: Optional[str] = entity_field(FieldType.STRING)
    email: Optional[str] = entity_field(FieldType.STRING, unique=True)
    email_verified: Optional[datetime] = entity_field(FieldType.DATETIME, updatable=False)
    image: Optional[str] = entity_field(FieldType.STRING)
    password: Optional[str] = entity_field(FieldType.STRING)


@dataclass
class SubscriptionModel(BaseDataModel):  # pylint: disable=too-many-instance-attributes
    """
    A dataclass to store the billing subscription of a user.

    Attributes:
        user_id (str): The user this subscription belongs to. One subscription per user.
        plan (str): The plan name (e.g. FREE, PREMIUM).
        status (str): The billing status (e.g. active, inactive).
        stripe_customer_id (str): Stripe customer reference.
        stripe_subscription_id (str): Stripe subscription reference.
        stripe_price_id (str): Stripe price reference.
        stripe_current_period_end (datetime): End of the current Stripe billing period.
        ls_customer_id (str): Lemon Squeezy customer reference.
        ls_subscription_id (str): Lemon Squeezy subscription reference.
        ls_variant_id (str): Lemon Squeezy variant reference.
        ls_current_period_end (datetime): End of the current Lemon Squeezy billing period.
        cancel_at_period_end (bool): Whether the subscription ends with the current period.
    """

    entity_kind: ClassVar[str] = "subscription"
    display_name: ClassVar[str] = "Subscription"
    scoping_key: ClassVar[Optional[str]] = "user_id"

    user_id: str = entity_field(FieldType.STRING, required=True, nullable=False, relation=True, unique=True)
    plan: str = entity_field(FieldType.STRING, nullable=False, default="FREE")
    status: str = entity_field(FieldType.STRING, nullable=False, default="inactive")
    stripe_customer_id: Optional[str] = entity_field(FieldType.STRING)
    stripe_subscription_id: Optional[str] = entity_field(FieldType.STRING)
    stripe_price_id: Optional[str] = entity_field(FieldType.STRING)
    stripe_current_period_end: Optional[datetime] = entity_field(FieldType.DATETIME)
    ls_customer_id: Optional[str] = entity_field(FieldType.STRING)
    ls_subscription_id: Optional[str] = entity_field(FieldType.STRING)
    ls_variant_id: Optional[str] = entity_field(FieldType.STRING)
    ls_current_period_end: Optional[datetime] = entity_field(FieldType.DATETIME)
    cancel_at_period_end: bool = entity_field(FieldType.BOOLEAN, nullable=False, default=False)


@dataclass
class OrganizationModel(BaseDataModel):
    """
    A dataclass to store the information for an organization.

    Attributes:
        name (str): The organization's name.
        description (str): A free-form description.
    """

    entity_kind: ClassVar[str] = "organization"
    display_name: ClassVar[str] = "Organization"

    name: str = entity_field(FieldType.STRING, required=True, nullable=False)
    description: Optional[str] = entity_field(FieldType.STRING)


@dataclass
class ProjectModel(BaseDataModel):
    """
    A dataclass to store the information for a project.

    Attributes:
        name (str): The project's name.
        description (str): A free-form description.
        is_public (bool): Whether the project is visible to everyone.
        owner_id (str): The user who owns the project.
        organization_id (str): The organization the project belongs to, if any.
    """

    entity_kind: ClassVar[str] = "project"
    display_name: ClassVar[str] = "Project"
    scoping_key: ClassVar[Optional[str]] = "organization_id"

    name: str = entity_field(FieldType.STRING, required=True, nullable=False)
    description: Optional[str] = entity_field(FieldType.STRING)
    is_public: bool = entity_field(FieldType.BOOLEAN, nullable=False, default=False)
    owner_id: str = entity_field(FieldType.STRING, required=True, nullable=False, relation=True, updatable=False)
    organization_id: Optional[str] = entity_field(FieldType.STRING, relation=True)


@dataclass
class DrawingModel(BaseDataModel):
    """
    A dataclass to store a 2D drawing.

    Attributes:
        name (str): The drawing's name.
        description (str): A free-form description.
        data (Dict): The drawing document (shapes, layers, etc.).
        thumbnail (str): A preview image reference.
        project_id (str): The project the drawing belongs to.
    """

    entity_kind: ClassVar[str] = "drawing"
    display_name: ClassVar[str] = "Drawing"
    scoping_key: ClassVar[Optional[str]] = "project_id"

    name: str = entity_field(FieldType.STRING, required=True, nullable=False)
    description: Optional[str] = entity_field(FieldType.STRING)
    data: Dict = entity_field(FieldType.JSON, required=True, nullable=False)
    thumbnail: Optional[str] = entity_field(FieldType.STRING)
    project_id: str = entity_field(FieldType.STRING, required=True, nullable=False, relation=True, updatable=False)


@dataclass
class ComponentModel(BaseDataModel):  # pylint: disable=too-many-instance-attributes
    """
    A dataclass to store a reusable CAD component.

    Attributes:
        name (str): The component's name.
        description (str): A free-form description.
        data (Dict): The component geometry document.
        thumbnail (str): A preview image reference.
        type (str): The component category (e.g. mechanical, electronic).
        is_public (bool): Whether the component is visible to everyone.
        project_id (str): The project the component belongs to.
    """

    entity_kind: ClassVar[str] = "component"
    display_name: ClassVar[str] = "Component"
    scoping_key: ClassVar[Optional[str]] = "project_id"

    name: str = entity_field(FieldType.STRING, required=True, nullable=False)
    description: Optional[str] = entity_field(FieldType.STRING)
    data: Dict = entity_field(FieldType.JSON, required=True, nullable=False)
    thumbnail: Optional[str] = entity_field(FieldType.STRING)
    type: Optional[str] = entity_field(FieldType.STRING)
    is_public: bool = entity_field(FieldType.BOOLEAN, nullable=False, default=False)
    project_id: str = entity_field(FieldType.STRING, required=True, nullable=False, relation=True, updatable=False)


@dataclass
class MaterialModel(BaseDataModel):
    """
    A dataclass to store a stock material.

    Attributes:
        name (str): The material's name.
        description (str): A free-form description.
        properties (Dict): Physical and machining properties (density, hardness, ...).
        is_public (bool): Whether the material is visible to everyone.
        owner_id (str): The user who owns the material, if any.
        organization_id (str): The organization the material belongs to, if any.
    """

    entity_kind: ClassVar[str] = "material"
    display_name: ClassVar[str] = "Material"
    scoping_key: ClassVar[Optional[str]] = "organization_id"

    name: str = entity_field(FieldType.STRING, required=True, nullable=False)
    description: Optional[str] = entity_field(FieldType.STRING)
    properties: Dict = entity_field(FieldType.JSON, required=True, nullable=False)
    is_public: bool = entity_field(FieldType.BOOLEAN, nullable=False, default=False)
    owner_id: Optional[str] = entity_field(FieldType.STRING, relation=True, updatable=False)
    organization_id: Optional[str] = entity_field(FieldType.STRING, relation=True, updatable=False)


@dataclass
class ToolModel(BaseDataModel):  # pylint: disable=too-many-instance-attributes
    """
    A dataclass to store a cutting tool.

    Attributes:
        name (str): The tool's name.
        type (str): The tool type (e.g. endmill, drill).
        diameter (float): The cutting diameter.
        material (str): The tool material (e.g. carbide, HSS).
        number_of_flutes (float): Flute count.
        max_rpm (float): Maximum spindle speed.
        coolant_type (str): Recommended coolant.
        cutting_length (float): Length of the cutting edge.
        total_length (float): Overall tool length.
        shank_diameter (float): Shank diameter.
        notes (str): Free-form notes.
        is_public (bool): Whether the tool is visible to everyone.
        owner_id (str): The user who owns the tool, if any.
        organization_id (str): The organization the tool belongs to, if any.
    """

    entity_kind: ClassVar[str] = "tool"
    display_name: ClassVar[str] = "Tool"
    scoping_key: ClassVar[Optional[str]] = "organization_id"

    name: str = entity_field(FieldType.STRING, required=True, nullable=False)
    type: str = entity_field(FieldType.STRING, required=True, nullable=False)
    diameter: float = entity_field(FieldType.NUMBER, required=True, nullable=False)
    material: str = entity_field(FieldType.STRING, required=True, nullable=False)
    number_of_flutes: Optional[float] = entity_field(FieldType.NUMBER)
    max_rpm: Optional[float] = entity_field(FieldType.NUMBER, alias="maxRPM")
    coolant_type: Optional[str] = entity_field(FieldType.STRING)
    cutting_length: Optional[float] = entity_field(FieldType.NUMBER)
    total_length: Optional[float] = entity_field(FieldType.NUMBER)
    shank_diameter: Optional[float] = entity_field(FieldType.NUMBER)
    notes: Optional[str] = entity_field(FieldType.STRING)
    is_public: bool = entity_field(FieldType.BOOLEAN, nullable=False, default=False)
    owner_id: Optional[str] = entity_field(FieldType.STRING, relation=True, updatable=False)
    organization_id: Optional[str] = entity_field(FieldType.STRING, relation=True, updatable=False)


@dataclass
class MachineConfigModel(BaseDataModel):
    """
    A dataclass to store a CNC machine configuration.

    Attributes:
        name (str): The configuration's name.
        type (str): The machine type (e.g. mill, lathe, router).
        description (str): A free-form description.
        config (Dict): The machine parameters (work envelope, spindle, controller, ...).
        is_public (bool): Whether the configuration is visible to everyone.
        owner_id (str): The user who owns the configuration.
    """

    entity_kind: ClassVar[str] = "machine_config"
    display_name: ClassVar[str] = "MachineConfig"
    scoping_key: ClassVar[Optional[str]] = "owner_id"

    name: str = entity_field(FieldType.STRING, required=True, nullable=False)
    type: str = entity_field(FieldType.STRING, required=True, nullable=False)
    description: Optional[str] = entity_field(FieldType.STRING)
    config: Dict = entity_field(FieldType.JSON, required=True, nullable=False)
    is_public: bool = entity_field(FieldType.BOOLEAN, nullable=False, default=False)
    owner_id: str = entity_field(FieldType.STRING, required=True, nullable=False, relation=True, updatable=False)


@dataclass
class ToolpathModel(BaseDataModel):  # pylint: disable=too-many-instance-attributes
    """
    A dataclass to store a generated toolpath.

    Attributes:
        name (str): The toolpath's name.
        description (str): A free-form description.
        data (Dict): The toolpath document. Optional; may be cleared.
        type (str): The toolpath type.
        operation_type (str): The machining operation (e.g. pocket, contour).
        gcode (str): The generated G-code program.
        thumbnail (str): A preview image reference.
        is_public (bool): Whether the toolpath is visible to everyone.
        project_id (str): The project the toolpath belongs to.
        created_by (str): The user who created the toolpath.
        drawing_id (str): The source drawing, if any.
        material_id (str): The stock material, if any.
        tool_id (str): The cutting tool, if any.
        machine_config_id (str): The target machine configuration, if any.
    """

    entity_kind: ClassVar[str] = "toolpath"
    display_name: ClassVar[str] = "Toolpath"
    scoping_key: ClassVar[Optional[str]] = "project_id"

    name: str = entity_field(FieldType.STRING, required=True, nullable=False)
    description: Optional[str] = entity_field(FieldType.STRING)
    data: Optional[Dict] = entity_field(FieldType.JSON)
    type: Optional[str] = entity_field(FieldType.STRING)
    operation_type: Optional[str] = entity_field(FieldType.STRING)
    gcode: Optional[str] = entity_field(FieldType.STRING)
    thumbnail: Optional[str] = entity_field(FieldType.STRING)
    is_public: bool = entity_field(FieldType.BOOLEAN, nullable=False, default=False)
    project_id: str = entity_field(FieldType.STRING, required=True, nullable=False, relation=True, updatable=False)
    created_by: str = entity_field(FieldType.STRING, required=True, nullable=False, relation=True, updatable=False)
    drawing_id: Optional[str] = entity_field(FieldType.STRING, relation=True, updatable=False)
    material_id: Optional[str] = entity_field(FieldType.STRING, relation=True, updatable=False)
    tool_id: Optional[str] = entity_field(FieldType.STRING, relation=True, updatable=False)
    machine_config_id: Optional[str] = entity_field(FieldType.STRING, relation=True, updatable=False)


@dataclass
class LibraryItemModel(BaseDataModel):  # pylint: disable=too-many-instance-attributes
    """
    A dataclass to store a shared library item (template, fixture, part, ...).

    Attributes:
        name (str): The item's name.
        description (str): A free-form description.
        category (str): The library category.
        type (str): The item type within its category.
        data (Dict): The item document.
        properties (Dict): Extra properties. Optional; may be cleared.
        tags (List[str]): Search tags.
        thumbnail (str): A preview image reference.
        is_public (bool): Whether the item is visible to everyone.
        owner_id (str): The user who owns the item, if any.
        organization_id (str): The organization the item belongs to, if any.
    """

    entity_kind: ClassVar[str] = "library_item"
    display_name: ClassVar[str] = "LibraryItem"
    scoping_key: ClassVar[Optional[str]] = "organization_id"

    name: str = entity_field(FieldType.STRING, required=True, nullable=False)
    description: Optional[str] = entity_field(FieldType.STRING)
    category: str = entity_field(FieldType.STRING, required=True, nullable=False)
    type: str = entity_field(FieldType.STRING, required=True, nullable=False)
    data: Dict = entity_field(FieldType.JSON, required=True, nullable=False)
    properties: Optional[Dict] = entity_field(FieldType.JSON)
    tags: List[str] = entity_field(FieldType.STRING_LIST, nullable=False, default=[])
    thumbnail: Optional[str] = entity_field(FieldType.STRING)
    is_public: bool = entity_field(FieldType.BOOLEAN, nullable=False, default=False)
    owner_id: Optional[str] = entity_field(FieldType.STRING, relation=True, updatable=False)
    organization_id: Optional[str] = entity_field(FieldType.STRING, relation=True, updatable=False)


ALL_MODELS: Tuple[Type[BaseDataModel], ...] = (
    UserModel,
    OrganizationModel,
    ProjectModel,
    DrawingModel,
    ComponentModel,
    MaterialModel,
    ToolModel,
    MachineConfigModel,
    ToolpathModel,
    LibraryItemModel,
    SubscriptionModel,
)
