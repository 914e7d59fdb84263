# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_authz

import json

from coreason_authz.enums import (
    ApplicationType,
    ClientAuthMethod,
    GrantType,
    JWSAlg,
    Prompt,
    ResponseType,
    SubjectType,
    TokenType,
)
from coreason_authz.models import (
    AuthorizationAction,
    AuthorizationFailReason,
    AuthorizationFailRequest,
    AuthorizationIssueRequest,
    AuthorizationResponse,
    Client,
    IntrospectionResponse,
    Property,
    Service,
    TokenCreateRequest,
    TokenRequest,
    TokenResponse,
)


def test_requests_are_serialized_in_camel_case_without_nulls() -> None:
    request = TokenRequest(parameters="grant_type=password", client_id="123", client_certificate_path=["a", "b"])
    assert request.to_wire() == {
        "parameters": "grant_type=password",
        "clientId": "123",
        "clientCertificatePath": ["a", "b"],
    }


def test_enum_values_travel_by_name() -> None:
    request = AuthorizationFailRequest(ticket="t", reason=AuthorizationFailReason.EXCEEDS_MAX_AGE)
    assert request.to_wire() == {"ticket": "t", "reason": "EXCEEDS_MAX_AGE"}

    create = TokenCreateRequest(grant_type=GrantType.CLIENT_CREDENTIALS, client_id=42)
    wire = create.to_wire()
    assert wire["grantType"] == "CLIENT_CREDENTIALS"
    assert wire["clientId"] == 42


def test_issue_request_keeps_zero_auth_time() -> None:
    wire = AuthorizationIssueRequest(ticket="t", subject="u1").to_wire()
    assert wire == {"ticket": "t", "subject": "u1", "authTime": 0}


def test_responses_are_parsed_from_camel_case() -> None:
    response = AuthorizationResponse.model_validate(
        {
            "action": "NO_INTERACTION",
            "ticket": "tkt",
            "maxAge": 3600,
            "acrEssential": True,
            "claimsLocales": ["en", "fr"],
            "prompts": ["NONE"],
            "resultCode": "A004001",
            "unknownField": "ignored",
        }
    )
    assert response.action == AuthorizationAction.NO_INTERACTION
    assert response.ticket == "tkt"
    assert response.max_age == 3600
    assert response.acr_essential is True
    assert response.claims_locales == ["en", "fr"]
    assert response.prompts == [Prompt.NONE]
    assert response.result_code == "A004001"


def test_unknown_action_is_kept_verbatim() -> None:
    response = AuthorizationResponse.model_validate({"action": "SOMETHING_NEW"})
    assert response.action == "SOMETHING_NEW"
    assert not isinstance(response.action, AuthorizationAction)


def test_unknown_enum_values_are_dropped() -> None:
    response = TokenResponse.model_validate(
        {
            "action": "OK",
            "grantType": "FUTURE_GRANT",
            "clientAuthMethod": "CLIENT_SECRET_BASIC",
            "requestedTokenType": "ACCESS_TOKEN",
        }
    )
    assert response.grant_type is None
    assert response.client_auth_method == ClientAuthMethod.CLIENT_SECRET_BASIC
    assert response.requested_token_type == TokenType.ACCESS_TOKEN

    service = Service.model_validate({"supportedGrantTypes": ["AUTHORIZATION_CODE", "FUTURE_GRANT", "PASSWORD"]})
    assert service.supported_grant_types == [GrantType.AUTHORIZATION_CODE, GrantType.PASSWORD]


def test_property_hidden_flag_survives_a_round_trip() -> None:
    properties = [
        Property(key="example_parameter", value="example_value", hidden=False),
        Property(key="internal", value="true", hidden=True),
    ]
    wire = TokenRequest(parameters="", properties=properties).to_wire()
    assert wire["properties"] == [
        {"key": "example_parameter", "value": "example_value", "hidden": False},
        {"key": "internal", "value": "true", "hidden": True},
    ]

    echoed = IntrospectionResponse.model_validate_json(
        json.dumps({"action": "OK", "properties": wire["properties"]})
    )
    assert echoed.properties == properties
    assert echoed.properties is not None
    assert echoed.properties[1].hidden is True
    assert echoed.properties[1].value == "true"


def test_client_preserves_undeclared_fields() -> None:
    client = Client.model_validate({"clientId": 57297408867, "clientName": "My App", "jwksUri": "https://x/jwks"})
    assert client.client_id == 57297408867
    wire = client.to_wire()
    assert wire["clientName"] == "My App"
    assert wire["jwksUri"] == "https://x/jwks"


def test_client_and_service_metadata_enums() -> None:
    client = Client.model_validate(
        {
            "applicationType": "WEB",
            "subjectType": "PAIRWISE",
            "responseTypes": ["CODE", "CODE_ID_TOKEN", "SOMETHING_NEW"],
            "idTokenSignAlg": "ES256",
            "tokenAuthSignAlg": "PS512",
            "userInfoSignAlg": "NOT_AN_ALG",
        }
    )
    assert client.application_type == ApplicationType.WEB
    assert client.subject_type == SubjectType.PAIRWISE
    assert client.response_types is not None
    assert client.response_types == [ResponseType.CODE, ResponseType.CODE_ID_TOKEN]
    assert client.response_types[1].string == "code id_token"
    assert client.id_token_sign_alg == JWSAlg.ES256
    assert client.token_auth_sign_alg == JWSAlg.PS512
    assert client.user_info_sign_alg is None
    assert client.to_wire()["subjectType"] == "PAIRWISE"

    service = Service.model_validate({"supportedResponseTypes": ["CODE", "TOKEN"], "accessTokenSignAlg": "RS256"})
    assert service.supported_response_types == [ResponseType.CODE, ResponseType.TOKEN]
    assert service.access_token_sign_alg == JWSAlg.RS256
    assert service.to_wire() == {
        "supportedResponseTypes": ["CODE", "TOKEN"],
        "accessTokenSignAlg": "RS256",
        "pkceRequired": False,
        "parRequired": False,
    }
