# topmark:header:start
#
#   project      : Rewriter
#   file         : __init__.py
#   file_relpath : src/rewriter/pipeline/stages/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in pipeline stages.

Modules in this package register their stage classes with the registry
decorators on import; see
[`register_builtin_stages`][rewriter.registry.instances.register_builtin_stages].
"""
