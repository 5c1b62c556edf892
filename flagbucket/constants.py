"""String constants shared by the bucketing engine."""

OPERATOR_AND = "and"
OPERATOR_OR = "or"

VARIABLE_EVALUATED_EVENT = "variableEvaluated"
VARIABLE_DEFAULTED_EVENT = "variableDefaulted"
AGG_VARIABLE_EVALUATED_EVENT = "aggVariableEvaluated"
AGG_VARIABLE_DEFAULTED_EVENT = "aggVariableDefaulted"

TYPE_ALL = "all"
TYPE_USER = "user"
TYPE_OPT_IN = "optIn"
TYPE_AUDIENCE_MATCH = "audienceMatch"

SUB_TYPE_USER_ID = "user_id"
SUB_TYPE_EMAIL = "email"
SUB_TYPE_IP = "ip"
SUB_TYPE_COUNTRY = "country"
SUB_TYPE_PLATFORM = "platform"
SUB_TYPE_PLATFORM_VERSION = "platformVersion"
SUB_TYPE_APP_VERSION = "appVersion"
SUB_TYPE_DEVICE_MODEL = "deviceModel"
SUB_TYPE_CUSTOM_DATA = "customData"

COMPARATOR_EQUAL = "="
COMPARATOR_NOT_EQUAL = "!="
COMPARATOR_GREATER = ">"
COMPARATOR_GREATER_EQUAL = ">="
COMPARATOR_LESS = "<"
COMPARATOR_LESS_EQUAL = "<="
COMPARATOR_EXIST = "exist"
COMPARATOR_NOT_EXIST = "!exist"
COMPARATOR_CONTAIN = "contain"
COMPARATOR_NOT_CONTAIN = "!contain"

DATA_KEY_TYPE_STRING = "String"
DATA_KEY_TYPE_BOOLEAN = "Boolean"
DATA_KEY_TYPE_NUMBER = "Number"

VARIABLE_TYPE_STRING = "String"
VARIABLE_TYPE_NUMBER = "Number"
VARIABLE_TYPE_JSON = "JSON"
VARIABLE_TYPE_BOOLEAN = "Boolean"

VARIABLE_TYPES = frozenset(
    {VARIABLE_TYPE_STRING, VARIABLE_TYPE_NUMBER, VARIABLE_TYPE_JSON, VARIABLE_TYPE_BOOLEAN}
)