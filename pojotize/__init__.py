import importlib

mod = "pojotize"
class LazyLoader:
    """
    Lazy loader for the pojotize functions to speed up startup time.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item in self._mappings:
            module_name, func_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, func_name)
        else:
            return self._load_module(f"{mod}.{item}")

# Define the functions and their corresponding module paths
_mappings = {
    "build_schema": (f"{mod}.schema_builder", "build_schema"),
    "SchemaBuilder": (f"{mod}.schema_builder", "SchemaBuilder"),
    "resolve_field_type": (f"{mod}.type_resolver", "resolve_field_type"),
    "infer_registry_from_json": (f"{mod}.jsontopojo", "infer_registry_from_json"),
    "convert_json_to_pojo": (f"{mod}.jsontopojo", "convert_json_to_pojo"),
    "convert_json_to_model": (f"{mod}.jsontopojo", "convert_json_to_model"),
    "convert_registry_to_java": (f"{mod}.modeltojava", "convert_registry_to_java"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
