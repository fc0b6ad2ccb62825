"""Tests for manifest_formatter.py — canonical layout and idempotency."""

import pytest

from pom_initializer.errors import MalformedInputError
from pom_initializer.manifest_formatter import (
    blank_line_after_sections,
    format_xml,
    root_tag_on_own_line,
    tidy_management_section,
)

COMPACT_POM = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<project xmlns="http://maven.apache.org/POM/4.0.0" '
    'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
    'xsi:schemaLocation="http://maven.apache.org/POM/4.0.0 '
    'https://maven.apache.org/xsd/maven-4.0.0.xsd">'
    "<modelVersion>4.0.0</modelVersion>"
    "<groupId>com.example</groupId>"
    "<artifactId>demo</artifactId>"
    "<version>1.0.0-SNAPSHOT</version>"
    "<packaging>jar</packaging>"
    "<properties><maven.compiler.release>25</maven.compiler.release></properties>"
    "<dependencyManagement><dependencies><dependency>"
    "<groupId>org.junit</groupId><artifactId>junit-bom</artifactId><version>9.9.9</version>"
    "<type>pom</type><scope>import</scope>"
    "</dependency></dependencies></dependencyManagement>"
    "<dependencies><dependency>"
    "<groupId>org.junit.jupiter</groupId><artifactId>junit-jupiter</artifactId><scope>test</scope>"
    "</dependency></dependencies>"
    "<build><plugins><plugin>"
    "<groupId>org.jacoco</groupId><artifactId>jacoco-maven-plugin</artifactId><version>9.9.9</version>"
    "</plugin></plugins></build>"
    "</project>"
)

EXPECTED = """\
<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0" xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xsi:schemaLocation="http://maven.apache.org/POM/4.0.0 https://maven.apache.org/xsd/maven-4.0.0.xsd">
    <modelVersion>4.0.0</modelVersion>

    <groupId>com.example</groupId>
    <artifactId>demo</artifactId>
    <version>1.0.0-SNAPSHOT</version>
    <packaging>jar</packaging>
    <properties>
        <maven.compiler.release>25</maven.compiler.release>
    </properties>

    <dependencyManagement>
        <dependencies>
            <dependency>
                <groupId>org.junit</groupId>
                <artifactId>junit-bom</artifactId>
                <version>9.9.9</version>
                <type>pom</type>
                <scope>import</scope>
            </dependency>
        </dependencies>
    </dependencyManagement>

    <dependencies>
        <dependency>
            <groupId>org.junit.jupiter</groupId>
            <artifactId>junit-jupiter</artifactId>
            <scope>test</scope>
        </dependency>
    </dependencies>

    <build>
        <plugins>
            <plugin>
                <groupId>org.jacoco</groupId>
                <artifactId>jacoco-maven-plugin</artifactId>
                <version>9.9.9</version>
            </plugin>
        </plugins>
    </build>
</project>
"""


class TestFormatXml:
    def test_canonical_layout(self):
        assert format_xml(COMPACT_POM) == EXPECTED

    def test_idempotent(self):
        once = format_xml(COMPACT_POM)
        assert format_xml(once) == once

    def test_idempotent_on_messy_input(self):
        messy = EXPECTED.replace("    <", "\t  <").replace("\n\n", "\n\n\n\n")
        once = format_xml(messy)
        assert once == EXPECTED
        assert format_xml(once) == once

    def test_no_namespace_prefixes(self):
        assert "ns0:" not in format_xml(COMPACT_POM)

    def test_declaration_added_when_missing(self):
        out = format_xml("<project><modelVersion>4.0.0</modelVersion></project>")
        assert out.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<project>')

    def test_single_trailing_newline(self):
        out = format_xml(COMPACT_POM + "\n\n\n")
        assert out.endswith("</project>\n")
        assert not out.endswith("\n\n")

    def test_comments_preserved(self):
        xml = "<project><build><configuration><!-- TODO: Please add a configuration --></configuration></build></project>"
        out = format_xml(xml)
        assert "<!-- TODO: Please add a configuration -->" in out
        assert format_xml(out) == out

    def test_text_content_preserved(self):
        out = format_xml("<project><description>  keeps inner text  </description></project>")
        assert "<description>  keeps inner text  </description>" in out

    def test_other_default_namespace_kept(self):
        out = format_xml(
            '<project xmlns="http://maven.apache.org/POM/4.1.0">'
            "<modelVersion>4.1.0</modelVersion><groupId>x</groupId></project>"
        )
        assert out == (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<project xmlns="http://maven.apache.org/POM/4.1.0">\n'
            "    <modelVersion>4.1.0</modelVersion>\n"
            "\n"
            "    <groupId>x</groupId>\n"
            "</project>\n"
        )
        assert format_xml(out) == out

    def test_prefixed_namespace_kept(self):
        out = format_xml(
            '<m:project xmlns:m="http://maven.apache.org/POM/4.0.0">'
            "<m:modelVersion>4.0.0</m:modelVersion>"
            "<m:properties><m:release>21</m:release></m:properties>"
            "<m:build/></m:project>"
        )
        assert out == (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<m:project xmlns:m="http://maven.apache.org/POM/4.0.0">\n'
            "    <m:modelVersion>4.0.0</m:modelVersion>\n"
            "\n"
            "    <m:properties>\n"
            "        <m:release>21</m:release>\n"
            "    </m:properties>\n"
            "\n"
            "    <m:build />\n"
            "</m:project>\n"
        )
        assert format_xml(out) == out

    def test_nested_declaration_stays_on_its_element(self):
        out = format_xml('<project xmlns="urn:a"><x:ext xmlns:x="urn:x" x:flag="1"/></project>')
        assert '<project xmlns="urn:a">' in out
        assert '<x:ext xmlns:x="urn:x" x:flag="1" />' in out

    def test_header_comment_kept(self):
        xml = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            "<!-- Licensed under Apache 2.0 -->\n"
            "<project><modelVersion>4.0.0</modelVersion></project>"
        )
        out = format_xml(xml)
        assert out.startswith(
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            "<!-- Licensed under Apache 2.0 -->\n"
            "<project>\n"
        )
        assert format_xml(out) == out

    def test_nodes_around_root_kept(self):
        xml = (
            '<?xml version="1.0" encoding="UTF-8"?>'
            '<?xml-stylesheet type="text/xsl" href="pom.xsl"?>'
            "<!DOCTYPE project>"
            "<project/>"
            "<!-- end -->"
        )
        assert format_xml(xml) == (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<?xml-stylesheet type="text/xsl" href="pom.xsl"?>\n'
            "<!DOCTYPE project>\n"
            "<project />\n"
            "<!-- end -->\n"
        )

    @pytest.mark.parametrize("blank", ["", "   ", "\n\t\n", None])
    def test_blank_input(self, blank):
        with pytest.raises(ValueError, match="Input source cannot be empty"):
            format_xml(blank)

    def test_malformed_input(self):
        with pytest.raises(MalformedInputError, match="Invalid XML content"):
            format_xml("<project><unclosed></project>")


class TestLayoutRules:
    def test_root_tag_on_own_line(self):
        xml = '<?xml version="1.0" encoding="UTF-8"?><project />'
        assert root_tag_on_own_line(xml) == '<?xml version="1.0" encoding="UTF-8"?>\n<project />'
        assert root_tag_on_own_line(root_tag_on_own_line(xml)) == root_tag_on_own_line(xml)

    def test_blank_line_after_sections_collapses(self):
        xml = "    </properties>\n\n\n    <build>"
        assert blank_line_after_sections(xml) == "    </properties>\n\n    <build>"

    def test_blank_line_after_sections_inserts(self):
        xml = "    </modelVersion>\n    <groupId>"
        assert blank_line_after_sections(xml) == "    </modelVersion>\n\n    <groupId>"

    def test_blank_line_after_prefixed_section(self):
        xml = "    </m:properties>\n    <m:build>"
        assert blank_line_after_sections(xml) == "    </m:properties>\n\n    <m:build>"

    def test_other_tags_untouched(self):
        xml = "    </groupId>\n    <artifactId>"
        assert blank_line_after_sections(xml) == xml

    def test_tidy_management_section(self):
        xml = "        </dependencies>\n\n    </dependencyManagement>\n    <dependencies>"
        assert tidy_management_section(xml) == (
            "        </dependencies>\n    </dependencyManagement>\n\n    <dependencies>"
        )
