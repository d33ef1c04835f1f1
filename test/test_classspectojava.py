"""
Tests for rendering class specs as Java classes
"""
import os
import shutil
import subprocess
import sys
import tempfile
import unittest

import pytest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from pojotize.classspec import ClassSpec, FieldSpec, ListOf, Primitive
from pojotize.classspectojava import ClassSpecToJava, convert_class_spec_to_java
from pojotize.inference import synthesize

PERSON_JAVA = '''package com.example;

import com.fasterxml.jackson.annotation.JsonProperty;
import lombok.AllArgsConstructor;
import lombok.Builder;
import lombok.Data;
import lombok.NoArgsConstructor;

@Data
@Builder
@NoArgsConstructor
@AllArgsConstructor
public class Person {
    @JsonProperty("address")
    private PersonAddress address;

    @Data
    @Builder
    @NoArgsConstructor
    @AllArgsConstructor
    public static class PersonAddress {
        @JsonProperty("city")
        private String city;
    }
}
'''

ITEM_JAVA = '''public class Item {
    private int id;

    public Item() {
    }

    public int getId() {
        return id;
    }

    public void setId(int id) {
        this.id = id;
    }
}
'''


class TestClassSpecToJava(unittest.TestCase):
    """Test cases for the Java code generator"""

    def test_render_nested_lombok_class(self):
        """Test rendering a class with a nested class and Lombok annotations"""
        spec = synthesize({"address": {"city": "NYC"}}, 'Person')
        self.assertEqual(ClassSpecToJava('com.example').render_class(spec), PERSON_JAVA)

    def test_render_plain_class(self):
        """Test rendering a class with accessors instead of Lombok and Jackson annotations"""
        spec = synthesize({"id": 1}, 'Item')
        java = ClassSpecToJava(lombok=False, jackson_annotations=False).render_class(spec)
        self.assertEqual(java, ITEM_JAVA)

    def test_type_mapping(self):
        """Test the Java types chosen for each descriptor"""
        spec = synthesize({
            "name": "a", "count": 1, "epoch": 2**40, "huge": 2**80, "flag": True, "ratio": 0.5,
            "ids": [2**40], "flags": [False], "grid": [[1.0]], "labels": ["x"], "parts": [{"n": 1}],
        }, 'Sample')
        java = ClassSpecToJava('com.example').render_class(spec)

        self.assertIn("private String name;", java)
        self.assertIn("private int count;", java)
        self.assertIn("private long epoch;", java)
        self.assertIn("private BigInteger huge;", java)
        self.assertIn("private boolean flag;", java)
        self.assertIn("private double ratio;", java)
        self.assertIn("private List<Long> ids;", java)
        self.assertIn("private List<Boolean> flags;", java)
        self.assertIn("private List<List<Double>> grid;", java)
        self.assertIn("private List<String> labels;", java)
        self.assertIn("private List<SampleParts> parts;", java)
        self.assertIn("public static class SampleParts {", java)
        self.assertIn("import java.math.BigInteger;\n", java)
        self.assertIn("import java.util.List;\n", java)

    def test_field_order_preserved(self):
        """Test that fields are emitted in JSON document order"""
        java = ClassSpecToJava().render_class(synthesize({"b": 1, "a": "x"}, 'Root'))
        self.assertLess(java.index("private int b;"), java.index("private String a;"))

    def test_reserved_words_and_json_names(self):
        """Test that reserved words are escaped and JSON names are kept in annotations"""
        spec = synthesize({"class": "x", "_class": "y", "first-name": "Ada", "quote\"d": 1}, 'Entry')
        java = ClassSpecToJava().render_class(spec)

        self.assertIn('@JsonProperty("class")\n    private String _class;', java)
        self.assertIn('@JsonProperty("_class")\n    private String _class_;', java)
        self.assertIn('@JsonProperty("first-name")\n    private String first_name;', java)
        self.assertIn('@JsonProperty("quote\\"d")\n    private int quote_d;', java)

    def test_empty_class_annotations(self):
        """Test that classes without fields only get the no-args constructor"""
        java = ClassSpecToJava().render_class(synthesize({"meta": {}}, 'Doc'))
        self.assertIn("@Data\n    @NoArgsConstructor\n    public static class DocMeta {\n    }", java)

    def test_invalid_package(self):
        """Test that invalid package names are rejected"""
        with self.assertRaises(ValueError):
            ClassSpecToJava('com.my-company')
        with self.assertRaises(ValueError):
            ClassSpecToJava('com.class.model')

    def test_reserved_class_name(self):
        """Test that a class spec named like a Java keyword is rejected"""
        with self.assertRaises(ValueError):
            ClassSpecToJava().render_class(ClassSpec('int', (FieldSpec('a', Primitive('int')),)))

    def test_nested_list_of_lists_import(self):
        """Test imports for a hand-built class spec"""
        spec = ClassSpec('Table', (FieldSpec('rows', ListOf(ListOf(Primitive('string')))),))
        java = ClassSpecToJava('org.sample').render_class(spec)
        self.assertTrue(java.startswith("package org.sample;\n\nimport com.fasterxml.jackson.annotation.JsonProperty;\nimport java.util.List;\n"))

    def test_write_project(self):
        """Test writing the Java file and the Maven project"""
        output_dir = tempfile.mkdtemp(prefix='pojotize-')
        try:
            spec = synthesize({"address": {"city": "NYC"}}, 'Person')
            java_file = convert_class_spec_to_java(spec, output_dir, package_name='com.example')

            self.assertEqual(java_file, os.path.join(output_dir, 'src', 'main', 'java', 'com', 'example', 'Person.java'))
            with open(java_file, 'r', encoding='utf-8') as f:
                self.assertEqual(f.read(), PERSON_JAVA)
            with open(os.path.join(output_dir, 'pom.xml'), 'r', encoding='utf-8') as f:
                pom = f.read()
            self.assertIn("<groupId>com</groupId>", pom)
            self.assertIn("<artifactId>example</artifactId>", pom)
            self.assertIn("<artifactId>jackson-databind</artifactId>", pom)
            self.assertIn("<artifactId>lombok</artifactId>", pom)
        finally:
            shutil.rmtree(output_dir, ignore_errors=True)

    def test_pom_not_overwritten(self):
        """Test that an existing pom.xml is left alone"""
        output_dir = tempfile.mkdtemp(prefix='pojotize-')
        try:
            pom_path = os.path.join(output_dir, 'pom.xml')
            with open(pom_path, 'w', encoding='utf-8') as f:
                f.write('<project/>')
            ClassSpecToJava('com.example', lombok=False).write_pom(output_dir)
            with open(pom_path, 'r', encoding='utf-8') as f:
                self.assertEqual(f.read(), '<project/>')
        finally:
            shutil.rmtree(output_dir, ignore_errors=True)

    def test_write_round_trip_test(self):
        """Test writing the JUnit round trip test and its sample resource"""
        output_dir = tempfile.mkdtemp(prefix='pojotize-')
        try:
            sample = os.path.join(output_dir, 'sample.json')
            with open(sample, 'w', encoding='utf-8') as f:
                f.write('{"id": 1}')
            generator = ClassSpecToJava('com.example')
            test_file = generator.write_round_trip_test(synthesize({"id": 1}, 'Item'), sample, output_dir)

            self.assertEqual(test_file, os.path.join(output_dir, 'src', 'test', 'java', 'com', 'example', 'ItemTest.java'))
            self.assertTrue(os.path.exists(os.path.join(output_dir, 'src', 'test', 'resources', 'Item.json')))
            with open(test_file, 'r', encoding='utf-8') as f:
                test_java = f.read()
            self.assertTrue(test_java.startswith("package com.example;\n\n"))
            self.assertIn("public class ItemTest {", test_java)
            self.assertIn('getResourceAsStream("/Item.json")', test_java)
            self.assertIn("mapper.treeToValue(expected, Item.class)", test_java)
        finally:
            shutil.rmtree(output_dir, ignore_errors=True)

    @pytest.mark.skipif(shutil.which("mvn") is None, reason="Maven is not installed")
    def test_generated_project_builds(self):
        """Test that the generated classes compile and deserialize the samples they came from"""
        cwd = os.getcwd()
        java_path = os.path.join(tempfile.gettempdir(), "pojotize", "samples-java")
        if os.path.exists(java_path):
            shutil.rmtree(java_path, ignore_errors=True)
        from pojotize.jsontojava import convert_json_to_java
        for lombok in (True, False):
            report = convert_json_to_java(
                [os.path.join(cwd, "test", "json", name) for name in ("person.json", "order.json")],
                java_path,
                package_name='com.example.samples',
                lombok=lombok,
                round_trip_tests=True)
            self.assertTrue(report.ok, report.failed)
            assert subprocess.check_call(["mvn", "package", "-B", "-q"], cwd=java_path,
                                         stdout=sys.stdout, stderr=sys.stderr) == 0
            shutil.rmtree(java_path, ignore_errors=True)


if __name__ == '__main__':
    unittest.main()
