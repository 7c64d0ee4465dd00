# tests/core/config/test_loader.py
"""
Testes do loader de declarações explícitas (YAML / JSON).

Este módulo valida o carregamento de uma declaração explícita de
configuração a partir de arquivo, garantindo que:
- YAML e JSON produzem a mesma `PublisherConfig`
- arquivos vazios produzem configuração vazia
- erros estruturais são falhas fatais e tipadas

Decisões arquiteturais:
    - A declaração explícita é fornecida pelo chamador e deve existir
    - Nenhuma coerção implícita de tipos é aplicada

Limites explícitos:
    - Não valida merge com outras fontes
"""

import json

import pytest

try:
    from central_publisher.core.config.errors import (
        ConfigError,
        ExplicitConfigNotFoundError,
        InvalidConfigRootTypeError,
        InvalidConfigValueError,
        UnknownConfigKeyError,
        UnsupportedConfigFormatError,
    )
    from central_publisher.core.config.loader import load_explicit_file
except Exception as e:  # noqa: BLE001
    load_explicit_file = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing explicit config loader. Implement:\n"
            "- src/central_publisher/core/config/loader.py (load_explicit_file)\n"
            f"Import error: {_IMPORT_ERR}"
        )


@pytest.fixture
def explicit_yaml() -> str:
    """
    Declaração explícita típica em YAML.

    Returns:
        str: Conteúdo YAML no formato camelCase de `PublisherConfig.to_dict()`.
    """
    return """\
credentials:
  username: dsl-user
projectInfo:
  name: acme-core
  url: https://github.com/acme/core
  developers:
    - id: alice
      email: alice@acme.example
publishing:
  autoPublish: false
  publications: [maven]
"""


def test_load_yaml(tmp_path, explicit_yaml):
    _require_imports()
    path = tmp_path / "publisher.yaml"
    path.write_text(explicit_yaml, encoding="utf-8")

    config = load_explicit_file(path)

    assert config.credentials.username == "dsl-user"
    assert config.project_info.developers[0].email == "alice@acme.example"
    assert config.publishing.auto_publish is False
    assert config.publishing.aggregation is None
    assert config.publishing.publications == frozenset({"maven"})


def test_yaml_and_json_are_equivalent(tmp_path, explicit_yaml):
    _require_imports()
    import yaml

    yaml_path = tmp_path / "publisher.yml"
    yaml_path.write_text(explicit_yaml, encoding="utf-8")
    json_path = tmp_path / "publisher.json"
    json_path.write_text(json.dumps(yaml.safe_load(explicit_yaml)), encoding="utf-8")

    assert load_explicit_file(yaml_path) == load_explicit_file(json_path)


@pytest.mark.parametrize("name", ["empty.yaml", "empty.json"])
def test_empty_file_is_empty_config(tmp_path, name):
    _require_imports()
    path = tmp_path / name
    path.write_text("", encoding="utf-8")
    assert load_explicit_file(path).is_empty()


def test_missing_file_raises(tmp_path):
    _require_imports()
    with pytest.raises(ExplicitConfigNotFoundError):
        load_explicit_file(tmp_path / "absent.yaml")


def test_unsupported_format_raises(tmp_path):
    _require_imports()
    path = tmp_path / "publisher.toml"
    path.write_text("[credentials]\n", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_explicit_file(path)


@pytest.mark.parametrize(
    "content, error",
    [
        ("- a\n- b\n", InvalidConfigRootTypeError),
        ("credentials:\n  token: x\n", UnknownConfigKeyError),
        ("publishing:\n  autoPublish: maybe\n", InvalidConfigValueError),
    ],
)
def test_structural_errors_are_typed(tmp_path, content, error):
    _require_imports()
    path = tmp_path / "publisher.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(error) as excinfo:
        load_explicit_file(path)
    assert isinstance(excinfo.value, ConfigError)
