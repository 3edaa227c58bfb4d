"""
Constants for the parser module.
"""

# Top level keys of signature documents
REMOTE_UDF_KEY = "udfSignatureMap"
DYNAMIC_LIBRARIES_UDF_KEYS = ("dynamicLibrariesUdfMap", "dynamicUdfSignatureMap")

# Signature object fields
OUTPUT_TYPE_FIELD = "outputType"
PARAM_TYPES_FIELD = "paramTypes"
SCHEMA_FIELD = "schema"
NAMESPACE_FIELD = "nameSpace"
ENTRYPOINT_FIELD = "entrypoint"
FILE_NAME_FIELD = "fileName"
DOC_STRING_FIELD = "docString"
ROUTINE_CHARACTERISTICS_FIELD = "routineCharacteristics"

# Scalar type keywords understood by the engine. The grammar parser accepts
# other names too; this list is informational (e.g. for is_known_type).
SCALAR_TYPE_NAMES = {
    "boolean",
    "tinyint",
    "smallint",
    "integer",
    "bigint",
    "real",
    "double",
    "varchar",
    "varbinary",
    "timestamp",
    "timestamp with time zone",
    "date",
    "time",
    "json",
    "unknown",
}

# Supported signature file extensions
SUPPORTED_JSON_EXTENSIONS = [".json"]
SUPPORTED_YAML_EXTENSIONS = [".yaml", ".yml"]
