"""Generates Java classes from sample JSON files.

This module provides:
- j2java: Synthesize Java classes (Jackson + Lombok) from JSON sample files
- j2spec: Write the synthesized class specs as JSON for inspection

Each sample file yields one root class named after the file. Files that cannot
be converted are logged and reported; the remaining files are still processed.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from pojotize.classspec import ClassSpec
from pojotize.classspectojava import ClassSpecToJava
from pojotize.common import class_name_from_file
from pojotize.errors import SchemaInferenceError
from pojotize.inference import DEFAULT_MAX_DEPTH, ClassSynthesizer

logger = logging.getLogger(__name__)


@dataclass
class ConversionReport:
    """Outcome of a batch conversion."""
    generated: Dict[str, str] = field(default_factory=dict)  # sample file -> output
    failed: Dict[str, str] = field(default_factory=dict)  # sample file -> error message

    @property
    def ok(self) -> bool:
        return not self.failed


def find_json_files(input_paths: Union[str, List[str]]) -> List[str]:
    """Expands the input paths to the JSON sample files they denote.

    Directories contribute their ``*.json`` files (extension matched
    case-insensitively, not recursive, sorted by name); files are taken as
    given.

    Args:
        input_paths: File and directory paths

    Returns:
        List of JSON file paths
    """
    if isinstance(input_paths, str):
        input_paths = [input_paths]
    if not input_paths:
        raise ValueError("At least one input file is required")

    json_files: List[str] = []
    for input_path in input_paths:
        if os.path.isdir(input_path):
            json_files.extend(
                os.path.join(input_path, name) for name in sorted(os.listdir(input_path))
                if name.lower().endswith('.json') and os.path.isfile(os.path.join(input_path, name)))
        elif os.path.isfile(input_path):
            json_files.append(input_path)
        else:
            raise ValueError(f"Invalid input path: {input_path}")

    if not json_files:
        raise ValueError(f"No JSON files found in: {', '.join(input_paths)}")
    return json_files


def load_json_sample(file_path: str) -> Any:
    """Loads one JSON sample document."""
    with open(file_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def synthesize_samples(json_files: List[str], report: ConversionReport, max_depth: int = DEFAULT_MAX_DEPTH,
                       empty_arrays: str = 'error', nested_naming: str = 'field') -> Dict[str, ClassSpec]:
    """Synthesizes the root class spec for each sample file.

    Failures are logged and recorded in the report.

    Returns:
        Class specs keyed by sample file path
    """
    specs: Dict[str, ClassSpec] = {}
    class_names: Dict[str, str] = {}
    for json_file in json_files:
        class_name = class_name_from_file(json_file)
        if class_name.casefold() in class_names:
            message = f"Class name {class_name} is already used by {class_names[class_name.casefold()]}"
            logger.warning("Skipping %s: %s", json_file, message)
            report.failed[json_file] = message
            continue
        try:
            value = load_json_sample(json_file)
            synthesizer = ClassSynthesizer(max_depth=max_depth, empty_arrays=empty_arrays,
                                           nested_naming=nested_naming)
            spec = synthesizer.synthesize(value, class_name)
        except (SchemaInferenceError, json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
            logger.warning("Skipping %s: %s", json_file, e)
            report.failed[json_file] = str(e)
            continue
        logger.info("Synthesized %s from %s (%d classes)", class_name, json_file, len(spec.class_names()))
        class_names[class_name.casefold()] = json_file
        specs[json_file] = spec
    return specs


def convert_json_to_java(
    input_paths: Union[str, List[str]],
    java_project_dir: str,
    package_name: str = '',
    lombok: bool = True,
    round_trip_tests: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
    empty_arrays: str = 'error',
    nested_naming: str = 'field'
) -> ConversionReport:
    """Generates Java classes from JSON sample files.

    Writes a Maven project with one Java class per sample file. Nested objects
    become static nested classes of the class that declares them.

    Args:
        input_paths: JSON files and/or directories holding JSON files
        java_project_dir: Output Maven project directory
        package_name: Java package; derived from the output directory name when empty
        lombok: Annotate classes with Lombok instead of generating accessors
        round_trip_tests: Also write JUnit tests that deserialize each sample
        max_depth: Maximum nesting depth below the root object
        empty_arrays: 'error' to reject empty arrays, 'string' to type them as List<String>
        nested_naming: 'field' or 'first-key' nested class naming

    Returns:
        Report of generated and failed files
    """
    if not package_name:
        package_name = os.path.basename(os.path.normpath(java_project_dir)).replace('-', '_').lower()
    classspectojava = ClassSpecToJava(package_name, lombok=lombok)
    json_files = find_json_files(input_paths)

    report = ConversionReport()
    specs = synthesize_samples(json_files, report, max_depth, empty_arrays, nested_naming)
    if specs:
        classspectojava.write_pom(java_project_dir)
    for json_file, spec in specs.items():
        java_file = classspectojava.write_class(spec, java_project_dir)
        if round_trip_tests:
            classspectojava.write_round_trip_test(spec, json_file, java_project_dir)
        logger.info("Generated %s", java_file)
        report.generated[json_file] = java_file

    if report.failed:
        logger.warning("%d of %d files could not be converted", len(report.failed), len(json_files))
    return report


def convert_json_to_classspec(
    input_paths: Union[str, List[str]],
    classspec_file: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    empty_arrays: str = 'error',
    nested_naming: str = 'field'
) -> ConversionReport:
    """Writes the class specs synthesized from JSON sample files as a JSON document.

    The document maps each root class name to its class spec tree.

    Args:
        input_paths: JSON files and/or directories holding JSON files
        classspec_file: Output JSON file
        max_depth: Maximum nesting depth below the root object
        empty_arrays: 'error' or 'string'
        nested_naming: 'field' or 'first-key'

    Returns:
        Report of converted and failed files
    """
    json_files = find_json_files(input_paths)
    report = ConversionReport()
    specs = synthesize_samples(json_files, report, max_depth, empty_arrays, nested_naming)

    # Ensure output directory exists
    output_dir = os.path.dirname(classspec_file)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)

    with open(classspec_file, 'w', encoding='utf-8') as f:
        json.dump({spec.name: spec.to_dict() for spec in specs.values()}, f, indent=2)
    for json_file, spec in specs.items():
        report.generated[json_file] = spec.name
    return report
