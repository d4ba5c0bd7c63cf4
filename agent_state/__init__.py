"""
Agent State — crash-safe persistence of the in-progress device operation.

## Usage

    from agent_state.persistence.repository import FileStateRepository

    repo = FileStateRepository("/etc/tedge")
    state = await repo.load()
"""

__version__ = "0.1.0"
