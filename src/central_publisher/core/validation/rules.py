# src/central_publisher/core/validation/rules.py
"""
Regras built-in de validação da configuração de publicação.

Regras (v1):
    - RequiredFieldValidator:
        - `credentials.username` / `credentials.password` obrigatórios quando a
          ação do chamador exige credenciais (ERROR)
        - username curto (< 3) e senha fraca (< 8 ou "password") (WARNING)
        - `projectInfo.name` obrigatório (ERROR)
    - UrlFormatValidator:
        - URLs definidas devem ser `http`/`https` com host (ERROR):
          `projectInfo.url`, `projectInfo.scm.url`, `projectInfo.license.url`,
          `projectInfo.issueManagement.url` e `organizationUrl` de developers

Limites explícitos:
    - URLs vazias não são verificadas (ausência é papel do RequiredFieldValidator)
    - Não verifica conectividade nem existência dos recursos
"""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import urlparse

from ..config.model import PublisherConfig
from .types import ValidationOptions, ValidationSeverity, ValidationViolation


def is_http_url(value: str) -> bool:
    try:
        parsed = urlparse(value.strip())
        host = parsed.hostname
    except ValueError:
        return False
    # exige host: `http://:80` e `https://@` são inválidas
    return parsed.scheme in ("http", "https") and bool(host)


class ConfigurationValidator:
    """Contrato de um validador: nome, descrição e `validate` puro."""

    name: str = ""
    description: str = ""

    def validate(
        self, config: PublisherConfig, options: ValidationOptions
    ) -> List[ValidationViolation]:
        raise NotImplementedError


class RequiredFieldValidator(ConfigurationValidator):
    name = "RequiredFieldValidator"
    description = "Validates that required fields for Maven Central publishing are present"

    def validate(
        self, config: PublisherConfig, options: ValidationOptions
    ) -> List[ValidationViolation]:
        violations: List[ValidationViolation] = []
        username = config.credentials.username.strip()
        password = config.credentials.password

        if options.require_credentials:
            if not username:
                violations.append(
                    ValidationViolation(
                        field="credentials.username",
                        message="Username is required for publishing to Maven Central",
                        code="REQ-CREDENTIALS_USERNAME",
                        suggestion="Set SONATYPE_USERNAME in the environment or gradle.properties",
                    )
                )
            if not password.strip():
                violations.append(
                    ValidationViolation(
                        field="credentials.password",
                        message="Password is required for publishing to Maven Central",
                        code="REQ-CREDENTIALS_PASSWORD",
                        suggestion="Set SONATYPE_PASSWORD in the environment or gradle.properties",
                    )
                )

        if username and len(username) < 3:
            violations.append(
                ValidationViolation(
                    field="credentials.username",
                    message="Username is very short and may be invalid",
                    code="REQ-USERNAME_SHORT",
                    severity=ValidationSeverity.WARNING,
                )
            )
        if password.strip() and (password == "password" or len(password) < 8):
            violations.append(
                ValidationViolation(
                    field="credentials.password",
                    message="Password appears to be weak",
                    code="REQ-WEAK_PASSWORD",
                    severity=ValidationSeverity.WARNING,
                )
            )

        if not config.project_info.name.strip():
            violations.append(
                ValidationViolation(
                    field="projectInfo.name",
                    message="Project name is required",
                    code="REQ-PROJECT_NAME",
                    suggestion="Set POM_NAME in gradle.properties or projectInfo.name explicitly",
                )
            )
        return violations


class UrlFormatValidator(ConfigurationValidator):
    name = "UrlFormatValidator"
    description = "Validates that configured URLs are absolute http/https URLs"

    _CHECKS = (
        ("projectInfo.url", "FMT-PROJECT_URL", "Project URL"),
        ("projectInfo.scm.url", "FMT-SCM_URL", "SCM URL"),
        ("projectInfo.license.url", "FMT-LICENSE_URL", "License URL"),
        ("projectInfo.issueManagement.url", "FMT-ISSUE_MANAGEMENT_URL", "Issue management URL"),
    )

    @staticmethod
    def _check(path: str, value: str, code: str, label: str) -> Optional[ValidationViolation]:
        if not value.strip() or is_http_url(value):
            return None
        return ValidationViolation(
            field=path,
            message=f"{label} must be a valid HTTP/HTTPS URL (got '{value}')",
            code=code,
            suggestion="Use an absolute URL such as https://github.com/owner/repo",
        )

    def validate(
        self, config: PublisherConfig, options: ValidationOptions
    ) -> List[ValidationViolation]:
        violations: List[ValidationViolation] = []
        for path, code, label in self._CHECKS:
            violation = self._check(path, config.get(path), code, label)
            if violation is not None:
                violations.append(violation)

        for i, developer in enumerate(config.project_info.developers):
            violation = self._check(
                f"projectInfo.developers[{i}].organizationUrl",
                developer.organization_url,
                "FMT-DEVELOPER_ORGANIZATION_URL",
                "Developer organization URL",
            )
            if violation is not None:
                violations.append(violation)
        return violations
