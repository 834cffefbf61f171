# Core packages: `syntax` (parsing, arena, printing) and `convert` (the
# class-to-hooks pipeline). Import from the subpackages directly.
