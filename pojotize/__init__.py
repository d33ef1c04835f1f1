"""Infer class hierarchies from sample JSON documents and generate Java data classes.

Public functions are resolved on first access so that the command line
utility starts without importing Jinja2.
"""

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
    "synthesize": (f"{mod}.inference", "synthesize"),
    "ClassSynthesizer": (f"{mod}.inference", "ClassSynthesizer"),
    "ClassSpec": (f"{mod}.classspec", "ClassSpec"),
    "SchemaInferenceError": (f"{mod}.errors", "SchemaInferenceError"),
    "convert_class_spec_to_java": (f"{mod}.classspectojava", "convert_class_spec_to_java"),
    "convert_json_to_java": (f"{mod}.jsontojava", "convert_json_to_java"),
    "convert_json_to_classspec": (f"{mod}.jsontojava", "convert_json_to_classspec"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
