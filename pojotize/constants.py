"""Constants for the pojotize package.

Versions of the Java dependencies written into generated Maven projects.
"""

JDK_VERSION = '21'

JACKSON_VERSION = '2.18.2'

LOMBOK_VERSION = '1.18.36'

# Java test dependencies
JUNIT_VERSION = '5.11.4'

MAVEN_SUREFIRE_VERSION = '3.5.2'

MAVEN_COMPILER_VERSION = '3.13.0'
