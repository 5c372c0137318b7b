import pytest

from autowire.config_store import ConfigStore, load_config_file, replace_recursive
from autowire.errors import ConfigsLocked, ConfigurationError


@pytest.fixture
def store():
    return ConfigStore()


def test_nested_mappings_are_merged_key_by_key():
    merged = replace_recursive(
        {"Mailer": {"host": "a", "options": {"tls": True, "timeout": 5}}},
        {"Mailer": {"options": {"timeout": 10}}, "Cache": {"ttl": 60}},
    )

    assert merged == {
        "Mailer": {"host": "a", "options": {"tls": True, "timeout": 10}},
        "Cache": {"ttl": 60},
    }


def test_lists_and_scalars_are_replaced_wholesale():
    merged = replace_recursive(
        {"hosts": ["a", "b", "c"], "port": 25, "options": {"x": 1}},
        {"hosts": ["z"], "port": 2525, "options": "none"},
    )

    assert merged == {"hosts": ["z"], "port": 2525, "options": "none"}


def test_merge_does_not_mutate_inputs():
    base = {"Mailer": {"host": "a"}}
    incoming = {"Mailer": {"port": 1}}

    replace_recursive(base, incoming)

    assert base == {"Mailer": {"host": "a"}}
    assert incoming == {"Mailer": {"port": 1}}


def test_later_blocks_override_earlier_ones(store):
    store.register({"Mailer": {"host": "a", "port": 25}})
    store.register({"Mailer": {"port": 2525}})

    assert store.snapshot() == {"Mailer": {"host": "a", "port": 2525}}


def test_snapshot_is_a_copy(store):
    store.register({"Mailer": {"options": {"tls": True}}})

    store.snapshot()["Mailer"]["options"]["tls"] = False

    assert store.snapshot()["Mailer"]["options"]["tls"] is True


def test_overrides_take_precedence_over_configuration(store):
    store.register({"Mailer": {"host": "a", "port": 25}})

    assert store.params_for("Mailer", {"port": 1}) == {"host": "a", "port": 1}
    assert store.params_for("Unconfigured", {"port": 1}) == {"port": 1}
    assert store.params_for("Unconfigured") == {}


def test_register_after_lock_raises(store):
    store.lock()

    with pytest.raises(ConfigsLocked):
        store.register({"Mailer": {"host": "a"}})


@pytest.mark.parametrize(
    "block, message",
    [
        (["Mailer"], "Configuration block must be a mapping"),
        ({1: {"host": "a"}}, "is not a class name"),
        ({"Mailer": "host=a"}, "Configuration for Mailer must be a mapping"),
    ],
)
def test_malformed_blocks_are_rejected(store, block, message):
    with pytest.raises(ConfigurationError, match=message):
        store.register(block)


def test_load_config_file(tmp_path):
    path = tmp_path / "di_config.yaml"
    path.write_text("Mailer:\n  host: smtp.example.com\n  ports: [25, 587]\n")

    assert load_config_file(path) == {"Mailer": {"host": "smtp.example.com", "ports": [25, 587]}}


def test_empty_config_file_is_empty_block(tmp_path):
    path = tmp_path / "di_config.yaml"
    path.write_text("")

    assert load_config_file(path) == {}


def test_non_mapping_config_file_raises(tmp_path):
    path = tmp_path / "di_config.yaml"
    path.write_text("- Mailer\n")

    with pytest.raises(ConfigurationError, match="must contain a mapping, got list"):
        load_config_file(path)


def test_unparseable_config_file_raises(tmp_path):
    path = tmp_path / "di_config.yaml"
    path.write_text("Mailer: [unclosed\n")

    with pytest.raises(ConfigurationError, match="Invalid configuration file"):
        load_config_file(path)


def test_registered_block_is_copied(store):
    block = {"Mailer": {"options": {"host": "a"}, "ports": [25]}}
    store.register(block)

    block["Mailer"]["options"]["host"] = "changed"
    block["Mailer"]["ports"].append(587)

    assert store.snapshot() == {"Mailer": {"options": {"host": "a"}, "ports": [25]}}


def test_effective_params_are_copies_of_configuration(store):
    store.register({"Mailer": {"options": {"host": "a"}}})

    params = store.params_for("Mailer")
    params["options"]["host"] = "changed"

    assert store.params_for("Mailer") == {"options": {"host": "a"}}


def test_override_values_are_passed_through(store):
    substitute = {"host": "mock"}

    assert store.params_for("Mailer", {"options": substitute})["options"] is substitute
