"""Infers classes from a JSON document and converts them to Java POJOs or a JSON model.

This module provides:
- j2pojo: Generate Java classes from a JSON sample document
- j2model: Write the inferred class model as JSON
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from pojotize.common import pascal
from pojotize.constants import ALWAYS_ANNOTATE_EXPOSE, DEFAULT_ROOT_CLASS_NAME, USE_M_PREFIX
from pojotize.errors import MalformedDocumentError
from pojotize.modeltojava import convert_registry_to_java
from pojotize.schema_builder import ProgressCallback, SchemaBuilder
from pojotize.schema_model import ClassRegistry

logger = logging.getLogger(__name__)


def infer_registry_from_json(json_text: str, root_class_name: str = DEFAULT_ROOT_CLASS_NAME,
                             progress: Optional[ProgressCallback] = None,
                             strict: bool = False) -> ClassRegistry:
    """Parses JSON text and infers its class registry.

    Args:
        json_text: The JSON document; the root must be an object
        root_class_name: Name of the class created for the root object
        progress: Optional sink for the fraction of classes finalized
        strict: Raise on conflicting field types within a merged class

    Returns:
        The finished class registry.
    """
    try:
        root_node = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(f"Invalid JSON: {e.msg} at line {e.lineno} column {e.colno}",
                                     context=root_class_name, cause=e) from e
    except RecursionError as e:
        raise MalformedDocumentError("Invalid JSON: document is nested too deeply to parse",
                                     context=root_class_name, cause=e) from e
    builder = SchemaBuilder(progress=progress, strict=strict)
    registry = builder.build(root_class_name, root_node)
    logger.info("Inferred %d classes for %s", len(registry), root_class_name)
    return registry


def convert_json_to_pojo(
    json_file_path: str,
    output_dir: str,
    root_class_name: str = '',
    package_name: str = '',
    use_m_prefix: bool = USE_M_PREFIX,
    always_annotate_expose: bool = ALWAYS_ANNOTATE_EXPOSE,
    strict: bool = False,
    progress: Optional[ProgressCallback] = None
) -> List[str]:
    """Generates Java classes from a JSON sample document.

    Args:
        json_file_path: Path of the JSON sample
        output_dir: Java source root to write into
        root_class_name: Name of the root class (default: derived from the file name)
        package_name: Java package of the generated classes
        use_m_prefix: Prefix field names with 'm'
        always_annotate_expose: Add @Expose next to @SerializedName
        strict: Fail on conflicting field types within a merged class
        progress: Optional sink for the fraction of classes finalized

    Returns:
        Paths of the written Java files.
    """
    registry = infer_registry_from_json(_read_text(json_file_path),
                                        root_class_name or _root_name_from_path(json_file_path),
                                        progress=progress, strict=strict)
    return convert_registry_to_java(registry, output_dir, package_name=package_name,
                                    use_m_prefix=use_m_prefix,
                                    always_annotate_expose=always_annotate_expose)


def convert_json_to_model(
    json_file_path: str,
    model_file_path: str,
    root_class_name: str = '',
    strict: bool = False
) -> Dict[str, Any]:
    """Writes the inferred class model of a JSON sample document as JSON.

    Args:
        json_file_path: Path of the JSON sample
        model_file_path: Output path for the model
        root_class_name: Name of the root class (default: derived from the file name)
        strict: Fail on conflicting field types within a merged class

    Returns:
        The model as written.
    """
    registry = infer_registry_from_json(_read_text(json_file_path),
                                        root_class_name or _root_name_from_path(json_file_path),
                                        strict=strict)
    model = registry.to_dict()

    # Ensure output directory exists
    output_dir = os.path.dirname(model_file_path)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)

    with open(model_file_path, 'w', encoding='utf-8') as f:
        json.dump(model, f, indent=2)
    return model


def _read_text(file_path: str) -> str:
    with open(file_path, 'r', encoding='utf-8') as f:
        return f.read()


def _root_name_from_path(file_path: str) -> str:
    stem = os.path.splitext(os.path.basename(file_path))[0]
    name = pascal(stem.replace('-', '_').replace(' ', '_').replace('.', '_'))
    return name or DEFAULT_ROOT_CLASS_NAME
