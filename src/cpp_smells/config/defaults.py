"""Default configurations for cpp-smells."""

# C and C++ source/header extensions picked up by directory discovery
DEFAULT_FILE_EXTENSIONS = [
    ".c",
    ".cc",
    ".cpp",
    ".cxx",
    ".c++",
    ".h",
    ".hh",
    ".hpp",
    ".hxx",
    ".inl",
]

# Directories never descended into during discovery
DEFAULT_IGNORE_DIRS = {
    ".git",
    ".svn",
    ".hg",
    ".venv",
    "venv",
    "node_modules",
    "__pycache__",
    "build",
    "cmake-build-debug",
    "cmake-build-release",
    "dist",
    "out",
    "third_party",
    "vendor",
}

# Threshold file looked up in the working directory when --config is absent
DEFAULT_CONFIG_FILENAME = ".cpp-smells.yaml"

# Grammar name understood by tree-sitter-language-pack
DEFAULT_GRAMMAR = "cpp"
