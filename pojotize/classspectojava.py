# pylint: disable=too-many-arguments, line-too-long

""" Generates Java classes from synthesized class specs """
import json
import os
import shutil
from typing import Dict, List

from pojotize.classspec import ClassRef, ClassSpec, ListOf, Primitive, TypeDescriptor
from pojotize.common import process_template, render_template
from pojotize.constants import (JACKSON_VERSION, JDK_VERSION, JUNIT_VERSION, LOMBOK_VERSION,
                                MAVEN_COMPILER_VERSION, MAVEN_SUREFIRE_VERSION)

LOMBOK_ANNOTATIONS = ['Data', 'Builder', 'NoArgsConstructor', 'AllArgsConstructor']


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


class ClassSpecToJava:
    """Renders class spec trees as Java classes with Jackson and Lombok annotations"""

    primitive_mapping = {
        'string': 'String',
        'int': 'int',
        'long': 'long',
        'biginteger': 'BigInteger',
        'boolean': 'boolean',
        'double': 'double',
    }
    boxed_mapping = {
        'string': 'String',
        'int': 'Integer',
        'long': 'Long',
        'biginteger': 'BigInteger',
        'boolean': 'Boolean',
        'double': 'Double',
    }

    def __init__(self, package_name: str = '', lombok: bool = True, jackson_annotations: bool = True) -> None:
        self.package_name = package_name.lower()
        self.lombok = lombok
        self.jackson_annotations = jackson_annotations
        for segment in self.package_name.split('.') if self.package_name else []:
            if not segment.isidentifier() or is_java_reserved_word(segment):
                raise ValueError(f"Invalid Java package name: {package_name}")

    def java_type(self, descriptor: TypeDescriptor, boxed: bool = False) -> str:
        """Maps a type descriptor to a Java type"""
        if isinstance(descriptor, Primitive):
            mapping = self.boxed_mapping if boxed else self.primitive_mapping
            return mapping[descriptor.kind]
        if isinstance(descriptor, ListOf):
            return f"List<{self.java_type(descriptor.element, boxed=True)}>"
        if isinstance(descriptor, ClassRef):
            return descriptor.name
        raise TypeError(f"Unsupported type descriptor: {descriptor!r}")

    def safe_field_name(self, name: str, taken: List[str]) -> str:
        """Converts a field name into a Java identifier that is unique within its class"""
        if is_java_reserved_word(name):
            name = '_' + name
        while name in taken:
            name = name + '_'
        return name

    def class_model(self, spec: ClassSpec) -> Dict:
        """Builds the template model for a class and its nested classes"""
        if is_java_reserved_word(spec.name):
            raise ValueError(f"Class name {spec.name} is a Java reserved word")
        fields = []
        taken: List[str] = []
        for field in spec.fields:
            name = self.safe_field_name(field.name, taken)
            taken.append(name)
            fields.append({
                'name': name,
                'json_name_literal': json.dumps(field.json_name),
                'type': self.java_type(field.type),
            })
        annotations: List[str] = []
        if self.lombok:
            # @AllArgsConstructor on a class without fields clashes with @NoArgsConstructor
            annotations = LOMBOK_ANNOTATIONS if fields else ['Data', 'NoArgsConstructor']
        return {
            'name': spec.name,
            'annotations': annotations,
            'fields': fields,
            'nested_classes': [self.class_model(nested) for nested in spec.nested_classes],
        }

    def imports_for(self, definition: str) -> List[str]:
        """Collects the imports a class definition needs"""
        imports = []
        if "List<" in definition:
            imports.append("java.util.List")
        if "BigInteger" in definition:
            imports.append("java.math.BigInteger")
        if self.jackson_annotations and "@JsonProperty" in definition:
            imports.append("com.fasterxml.jackson.annotation.JsonProperty")
        if self.lombok:
            for annotation in ['AllArgsConstructor', 'Builder', 'Data', 'NoArgsConstructor']:
                if f"@{annotation}" in definition:
                    imports.append(f"lombok.{annotation}")
        return sorted(imports)

    def render_class(self, spec: ClassSpec) -> str:
        """Renders a class spec tree as a Java compilation unit"""
        definition = process_template(
            "classspectojava/class_core.jinja",
            root=self.class_model(spec),
            lombok=self.lombok,
            jackson_annotations=self.jackson_annotations
        ).strip('\n') + '\n'
        header = ''
        if self.package_name:
            header += f"package {self.package_name};\n\n"
        imports = self.imports_for(definition)
        if imports:
            header += ''.join(f"import {imp};\n" for imp in imports) + "\n"
        return header + definition

    def package_dir(self, root_dir: str) -> str:
        return os.path.join(root_dir, *self.package_name.split('.')) if self.package_name else root_dir

    def write_class(self, spec: ClassSpec, output_dir: str) -> str:
        """Writes the Java file for a class spec tree into a Maven source tree and returns its path"""
        directory_path = self.package_dir(os.path.join(output_dir, "src", "main", "java"))
        os.makedirs(directory_path, exist_ok=True)
        file_path = os.path.join(directory_path, f"{spec.name}.java")
        with open(file_path, 'w', encoding='utf-8') as file:
            file.write(self.render_class(spec))
        return file_path

    def write_round_trip_test(self, spec: ClassSpec, sample_file: str, output_dir: str) -> str:
        """Writes a JUnit test that deserializes the sample document and serializes it back"""
        resource_name = f"{spec.name}.json"
        resources_dir = os.path.join(output_dir, "src", "test", "resources")
        os.makedirs(resources_dir, exist_ok=True)
        shutil.copyfile(sample_file, os.path.join(resources_dir, resource_name))
        file_path = os.path.join(self.package_dir(os.path.join(output_dir, "src", "test", "java")), f"{spec.name}Test.java")
        render_template(
            "classspectojava/round_trip_test.java.jinja",
            file_path,
            package=self.package_name,
            class_name=spec.name,
            resource_name=resource_name
        )
        return file_path

    def write_pom(self, output_dir: str) -> str:
        """Writes a Maven pom.xml for the generated classes unless one exists"""
        os.makedirs(output_dir, exist_ok=True)
        pom_path = os.path.join(output_dir, "pom.xml")
        if not os.path.exists(pom_path):
            package_elements = self.package_name.split('.') if self.package_name else ["com", "example"]
            groupid = '.'.join(package_elements[:-1]) if len(package_elements) > 1 else package_elements[0]
            artifactid = package_elements[-1]
            pom_content = process_template(
                "classspectojava/pom.xml.jinja",
                groupid=groupid,
                artifactid=artifactid,
                lombok=self.lombok,
                jdk_version=JDK_VERSION,
                jackson_version=JACKSON_VERSION,
                lombok_version=LOMBOK_VERSION,
                junit_version=JUNIT_VERSION,
                maven_compiler_version=MAVEN_COMPILER_VERSION,
                maven_surefire_version=MAVEN_SUREFIRE_VERSION
            )
            with open(pom_path, 'w', encoding='utf-8') as file:
                file.write(pom_content)
        return pom_path


def convert_class_spec_to_java(spec: ClassSpec, output_dir: str, package_name: str = '', lombok: bool = True,
                               jackson_annotations: bool = True) -> str:
    """
    Writes a class spec tree as a Java class inside a Maven project

    Args:
        spec: Root class spec
        output_dir: Maven project directory
        package_name: Java package of the generated class
        lombok: Add Lombok annotations instead of constructors and accessors
        jackson_annotations: Add Jackson @JsonProperty annotations

    Returns:
        Path of the written Java file
    """
    classspectojava = ClassSpecToJava(package_name, lombok=lombok, jackson_annotations=jackson_annotations)
    classspectojava.write_pom(output_dir)
    return classspectojava.write_class(spec, output_dir)
