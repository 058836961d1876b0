import importlib

CORE_MODULES = [
    "promotable",
    "promotable.cli",
    "promotable.descriptor",
    "promotable.errors",
    "promotable.models",
    "promotable.observability",
    "promotable.promote",
    "promotable.properties",
]


def test_core_package_layout_modules_importable() -> None:
    for module_name in CORE_MODULES:
        module = importlib.import_module(module_name)
        assert module is not None
