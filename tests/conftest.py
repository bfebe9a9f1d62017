"""
Shared fixtures: the sample user payloads and the schema document.
"""

import pytest
from fastapi.testclient import TestClient

from recordcheck.config import Settings
from recordcheck.validators import ConstraintValidator, default_user_rules


JSON_USER = b'{"name": "John", "age": 30, "email": "john@example.com"}'

XML_USER = b"""
    <?xml version="1.0" encoding="UTF-8" ?>
    <user>
        <name>Jane</name>
        <age>25</age>
        <email>jane@example.com</email>
    </user>
"""

XSD_USER = b"""
    <?xml version="1.0" encoding="UTF-8" ?>
    <xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
        <xs:element name="user">
            <xs:complexType>
                <xs:sequence>
                    <xs:element name="name" type="xs:string"/>
                    <xs:element name="age" type="xs:positiveInteger"/>
                    <xs:element name="email" type="xs:string"/>
                </xs:sequence>
            </xs:complexType>
        </xs:element>
    </xs:schema>
"""


@pytest.fixture
def json_user() -> bytes:
    return JSON_USER


@pytest.fixture
def xml_user() -> bytes:
    return XML_USER


@pytest.fixture
def xsd_user() -> bytes:
    return XSD_USER


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def user_validator(settings) -> ConstraintValidator:
    return ConstraintValidator(default_user_rules(settings))


@pytest.fixture
def client():
    from recordcheck.main import app

    with TestClient(app) as test_client:
        yield test_client
