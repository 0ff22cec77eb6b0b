"""Shared fixtures for the explorer tests"""

from typing import Any, Dict

import pytest

from openapi_explorer.config import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        request_timeout_seconds=5,
        spec_fetch_timeout_seconds=5,
        token_timeout_seconds=5,
    )


@pytest.fixture
def openapi3_document() -> Dict[str, Any]:
    """Dereferenced OpenAPI 3.0 document"""
    return {
        "openapi": "3.0.3",
        "info": {"title": "Pet Store", "version": "1.0.0"},
        "servers": [
            {"url": "https://api.example.com/v1"},
            {"url": "https://staging.example.com/v1"},
        ],
        "security": [{"bearerAuth": []}],
        "components": {
            "securitySchemes": {
                "bearerAuth": {"type": "http", "scheme": "bearer"},
                "apiKey": {"type": "apiKey", "in": "header", "name": "X-API-Key"},
            }
        },
        "paths": {
            "/pets": {
                "get": {
                    "operationId": "listPets",
                    "summary": "List all pets",
                    "tags": ["pets"],
                    "parameters": [
                        {"name": "limit", "in": "query", "required": False, "schema": {"type": "integer"}}
                    ],
                    "responses": {"200": {"description": "A list of pets"}},
                },
                "post": {
                    "summary": "Create a pet",
                    "requestBody": {
                        "content": {"application/json": {"schema": {"type": "object"}}}
                    },
                    "security": [],
                    "responses": {"201": {"description": "Created"}},
                },
            },
            "/pets/{petId}": {
                "parameters": [
                    {"name": "petId", "in": "path", "required": True, "schema": {"type": "string"}}
                ],
                "get": {
                    "operationId": "showPetById",
                    "parameters": [
                        {"name": "X-Request-Id", "in": "header", "schema": {"type": "string"}}
                    ],
                    "responses": {"200": {"description": "A pet"}},
                },
                "delete": {
                    "security": [{"apiKey": []}],
                    "responses": {"204": {"description": "Deleted"}},
                },
            },
        },
    }


@pytest.fixture
def swagger2_document() -> Dict[str, Any]:
    """Dereferenced Swagger 2.0 document"""
    return {
        "swagger": "2.0",
        "info": {"title": "Legacy Store", "version": "2.0"},
        "host": "legacy.example.com",
        "basePath": "/api",
        "schemes": ["http", "https"],
        "securityDefinitions": {
            "basic": {"type": "basic"},
            "oauth": {
                "type": "oauth2",
                "flow": "application",
                "tokenUrl": "https://legacy.example.com/oauth/token",
            },
        },
        "paths": {
            "/orders": {
                "post": {
                    "operationId": "createOrder",
                    "parameters": [
                        {"name": "order", "in": "body", "required": True, "schema": {"type": "object"}},
                        {"name": "X-Trace", "in": "header", "type": "string"},
                    ],
                    "responses": {"200": {"description": "ok"}},
                }
            },
            "/uploads": {
                "post": {
                    "parameters": [
                        {"name": "title", "in": "formData", "type": "string"},
                        {"name": "tags", "in": "formData", "type": "string"},
                    ],
                    "responses": {"200": {"description": "ok"}},
                }
            },
        },
    }
