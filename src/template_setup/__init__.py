"""One-time interactive setup for freshly cloned library templates.

Prompts for project metadata, fills the template placeholders, installs
dependencies, initializes git and (when the GitHub CLI is available) creates
and configures the remote repository.
"""
