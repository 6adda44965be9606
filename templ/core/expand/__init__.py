"""Tree expansion: walk a template root and render each entry.

The walker and the per-entry expander are shared by apply (writes the
rendered tree) and validate (dry run that only collects diagnostics).
"""
