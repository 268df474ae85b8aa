# LispFlat: a small Scheme-flavoured Lisp.
#
# Package layout mirrors the pipeline:
# - reader:      text -> tokens -> Expression trees
# - types:       Expression variants, procedures and environments
# - evaluation:  evaluate(expr, env) with special forms and application
# - builtin:     primitive procedures installed into the global environment
# - printer:     Expression -> text
#
# Everything importable from here is re-exported lazily by callers; this module
# stays import-light so that submodules can depend on each other freely.

__version__ = "0.3.0"
