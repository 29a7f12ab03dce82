"""project-on-save: run a shell command in the project root on every save.

Layout:
    project_on_save/
    ├── config.py          # OnSaveConfig + load_config (env > toml > defaults)
    ├── editor/            # Document model and the Workspace event source
    ├── project.py         # Project root resolution (marker walk-up)
    ├── registry.py        # Per-document OnSaveContext: command + cached root
    ├── output.py          # Append-only output buffers
    ├── dispatcher.py      # Sync/async command execution
    ├── mode.py            # Per-document save hook + global enablement
    ├── core.py            # ProjectOnSave hub wiring it all together
    └── repl.py            # Interactive front end
"""

__version__ = "0.1.0"
