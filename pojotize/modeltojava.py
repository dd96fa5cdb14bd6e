# pylint: disable=too-many-arguments, line-too-long

""" Generates Java POJO classes from an inferred class registry """

import logging
import os
import re
from typing import Dict, List, Optional, Set

from pojotize.common import lower_first, pascal, process_template, upper_first
from pojotize.constants import (ALWAYS_ANNOTATE_EXPOSE, GENERATOR_NAME, GSON_EXPOSE,
                                GSON_SERIALIZED_NAME, JAVA_GENERATED, JAVA_LIST, USE_M_PREFIX)
from pojotize.schema_model import (BOOLEAN, FLOAT64, INTEGER64, STRING, ClassModel, ClassRef,
                                   ClassRegistry, FieldModel, FieldType, ListOf)

logger = logging.getLogger(__name__)

JAVA_IDENTIFIER = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')

# getClass() is final on java.lang.Object
RESERVED_ACCESSOR_BASES = {'Class'}

PRIMITIVE_JAVA_TYPES = {
    BOOLEAN: 'Boolean',
    INTEGER64: 'Long',
    FLOAT64: 'Double',
    STRING: 'String',
}


def is_java_reserved_word(word: str) -> bool:
    """Checks if a word is a Java reserved word"""
    reserved_words = [
        'abstract', 'assert', 'boolean', 'break', 'byte', 'case', 'catch', 'char', 'class', 'const',
        'continue', 'default', 'do', 'double', 'else', 'enum', 'extends', 'final', 'finally', 'float',
        'for', 'goto', 'if', 'implements', 'import', 'instanceof', 'int', 'interface', 'long', 'native',
        'new', 'package', 'private', 'protected', 'public', 'return', 'short', 'static', 'strictfp',
        'super', 'switch', 'synchronized', 'this', 'throw', 'throws', 'transient', 'try', 'void', 'volatile',
        'while', 'true', 'false', 'null', 'record', '_',
    ]
    return word in reserved_words


def is_java_identifier(word: str) -> bool:
    """Checks if a word can be used as a Java identifier"""
    return bool(JAVA_IDENTIFIER.match(word)) and not is_java_reserved_word(word)


class ModelToJava:
    """Converts an inferred class registry to Java classes with Gson annotations"""

    def __init__(self, package_name: str = '', use_m_prefix: bool = USE_M_PREFIX,
                 always_annotate_expose: bool = ALWAYS_ANNOTATE_EXPOSE,
                 generator_name: str = GENERATOR_NAME) -> None:
        self.package_name = package_name
        self.use_m_prefix = use_m_prefix
        self.always_annotate_expose = always_annotate_expose
        self.generator_name = generator_name

    def class_name(self, name: str) -> str:
        """Maps a registry class name to a Java class name"""
        sanitized = re.sub(r'[^A-Za-z0-9_]', '_', name)
        class_name = pascal(sanitized) or upper_first(sanitized)
        if not class_name.strip('_'):
            class_name = 'Unnamed' + class_name
        if not is_java_identifier(class_name):
            class_name = '_' + class_name
        return class_name

    def java_type(self, field_type: FieldType) -> str:
        """Maps a field type to a Java type reference"""
        if isinstance(field_type, ListOf):
            return f"List<{self.java_type(field_type.item_type)}>"
        if isinstance(field_type, ClassRef):
            return self.class_name(field_type.name)
        return PRIMITIVE_JAVA_TYPES.get(field_type, 'Object')

    def base_name(self, property_name: str) -> str:
        """Property name stripped of underscores and characters Java does not allow"""
        base = re.sub(r'[^A-Za-z0-9$]', '', property_name)
        return upper_first(base) if base else 'Field'

    def field_name(self, property_name: str) -> str:
        """Formats a property name into a field name, e.g. first_name -> mFirstName"""
        return self.field_name_from_base(self.base_name(property_name))

    def field_name_from_base(self, base: str) -> str:
        """Formats an accessor base name into a field name"""
        field_name = base
        if self.use_m_prefix:
            field_name = 'm' + field_name
        if not is_java_identifier(field_name):
            field_name = '_' + field_name
        return field_name

    def unique_base_name(self, property_name: str, used_bases: Set[str]) -> str:
        """Base name not yet taken in the class, numbered from 2 on collision, e.g. Firstname2"""
        base = self.base_name(property_name)
        candidate = base
        suffix = 2
        while candidate in used_bases:
            candidate = f"{base}{suffix}"
            suffix += 1
        used_bases.add(candidate)
        return candidate

    def field_annotations(self, field_name: str, property_name: str) -> List[str]:
        """@SerializedName when the field name differs from the property name, @Expose otherwise"""
        if field_name != property_name:
            annotations = [f'@SerializedName("{_java_string(property_name)}")']
            if self.always_annotate_expose:
                annotations.append('@Expose')
            return annotations
        return ['@Expose']

    def generate_field_info(self, model_field: FieldModel, used_bases: Optional[Set[str]] = None) -> Dict[str, object]:
        """ Generates field information for template """
        if used_bases is None:
            base = self.base_name(model_field.property_name)
        else:
            base = self.unique_base_name(model_field.property_name, used_bases)
        field_name = self.field_name_from_base(base)
        param = lower_first(base)
        if not is_java_identifier(param):
            param = 'value'
        return {
            'name': field_name,
            'property_name': model_field.property_name,
            'type': self.java_type(model_field.type),
            'annotations': self.field_annotations(field_name, model_field.property_name),
            'getter': f"get{base}",
            'setter': f"set{base}",
            'param': param,
            'assign_target': f"this.{field_name}" if field_name == param else field_name,
        }

    def generate_class(self, clazz: ClassModel) -> str:
        """ Generates the Java source for one class """
        used_bases = set(RESERVED_ACCESSOR_BASES)
        fields = [self.generate_field_info(f, used_bases) for f in clazz.fields]
        imports = []
        if any('List<' in f['type'] for f in fields):
            imports.append(JAVA_LIST)
        if any('@Expose' in f['annotations'] for f in fields):
            imports.append(GSON_EXPOSE)
        if any(a.startswith('@SerializedName') for f in fields for a in f['annotations']):
            imports.append(GSON_SERIALIZED_NAME)
        imports.append(JAVA_GENERATED)
        return process_template(
            "modeltojava/class.java.jinja",
            package=self.package_name,
            imports=sorted(imports),
            generator=self.generator_name,
            class_name=self.class_name(clazz.name),
            fields=fields,
        )

    def write_to_file(self, output_dir: str, class_name: str, definition: str) -> str:
        """ Writes a Java class to a file below the package directory """
        package_path = self.package_name.replace('.', os.sep)
        directory_path = os.path.join(output_dir, package_path) if package_path else output_dir
        os.makedirs(directory_path, exist_ok=True)
        file_path = os.path.join(directory_path, f"{class_name}.java")
        with open(file_path, 'w', encoding='utf-8') as file:
            file.write(definition)
        return file_path

    def convert_registry(self, registry: ClassRegistry, output_dir: str) -> List[str]:
        """Writes one Java file per class and returns the written paths"""
        written: List[str] = []
        seen: Dict[str, str] = {}
        for clazz in registry:
            class_name = self.class_name(clazz.name)
            if class_name in seen:
                logger.warning("Classes %s and %s both map to Java class %s; keeping the first",
                               seen[class_name], clazz.name, class_name)
                continue
            seen[class_name] = clazz.name
            written.append(self.write_to_file(output_dir, class_name, self.generate_class(clazz)))
        logger.info("Wrote %d Java classes to %s", len(written), output_dir)
        return written


JAVA_STRING_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\b': '\\b',
    '\t': '\\t',
    '\n': '\\n',
    '\f': '\\f',
    '\r': '\\r',
}


def _java_string(value: str) -> str:
    """Escapes a value for use inside a Java string literal"""
    escaped = []
    for ch in value:
        if ch in JAVA_STRING_ESCAPES:
            escaped.append(JAVA_STRING_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7f:
            escaped.append(f'\\u{ord(ch):04x}')
        else:
            escaped.append(ch)
    return ''.join(escaped)


def convert_registry_to_java(registry: ClassRegistry, output_dir: str, package_name: str = '',
                             use_m_prefix: bool = USE_M_PREFIX,
                             always_annotate_expose: bool = ALWAYS_ANNOTATE_EXPOSE,
                             generator_name: Optional[str] = None) -> List[str]:
    """
    Converts an inferred class registry to Java classes

    Args:
        registry: The finished class registry
        output_dir: Output source root; packages become subdirectories
        package_name: Java package for all classes
        use_m_prefix: Prefix field names with 'm'
        always_annotate_expose: Add @Expose next to @SerializedName
        generator_name: Value of the @Generated annotation
    """
    modeltojava = ModelToJava(package_name=package_name, use_m_prefix=use_m_prefix,
                              always_annotate_expose=always_annotate_expose,
                              generator_name=generator_name or GENERATOR_NAME)
    return modeltojava.convert_registry(registry, output_dir)
