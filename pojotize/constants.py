"""Constants for the pojotize package."""

# Value of the @Generated annotation on emitted classes
GENERATOR_NAME = 'pojotize'

# Field naming defaults for emitted Java classes
USE_M_PREFIX = True
ALWAYS_ANNOTATE_EXPOSE = False

# Root class name used when none is given and none can be derived from a file name
DEFAULT_ROOT_CLASS_NAME = 'Root'

GSON_EXPOSE = 'com.google.gson.annotations.Expose'
GSON_SERIALIZED_NAME = 'com.google.gson.annotations.SerializedName'
JAVA_GENERATED = 'javax.annotation.processing.Generated'
JAVA_LIST = 'java.util.List'
