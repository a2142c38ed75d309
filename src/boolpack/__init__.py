"""boolpack - pack boolean struct fields into bit containers.

Plans, at build time, how a struct's ``bool`` fields collapse into one packed
integer (or a newtype around it): which fields stay, which width the
container gets, which bit each flag lives in, and which getters and setters a
code generator must emit.
"""

from boolpack.errors import (
    AmbiguousConfigError,
    BoolPackError,
    InvalidDefaultError,
    InvalidFieldTypeError,
    MalformedTemplateError,
    OutOfRangeError,
    SourceLocation,
    UnknownOptionError,
)
from boolpack.model import (
    AccessorSignature,
    AccessorSpec,
    Auto,
    FieldSchema,
    Fixed,
    GlobalConfig,
    Inline,
    LocalConfig,
    NamingOverride,
    NamingPolicy,
    NewType,
    NewTypeDecl,
    PackedType,
    Suppressed,
    TransformPlan,
    UseDefault,
    Visibility,
)
from boolpack.transform import StructRequest, TransformOutcome, transform_many, transform_struct

__version__ = "0.1.0"

__all__ = [
    "AccessorSignature",
    "AccessorSpec",
    "AmbiguousConfigError",
    "Auto",
    "BoolPackError",
    "FieldSchema",
    "Fixed",
    "GlobalConfig",
    "Inline",
    "InvalidDefaultError",
    "InvalidFieldTypeError",
    "LocalConfig",
    "MalformedTemplateError",
    "NamingOverride",
    "NamingPolicy",
    "NewType",
    "NewTypeDecl",
    "OutOfRangeError",
    "PackedType",
    "SourceLocation",
    "StructRequest",
    "Suppressed",
    "TransformOutcome",
    "TransformPlan",
    "UnknownOptionError",
    "UseDefault",
    "Visibility",
    "transform_many",
    "transform_struct",
]
