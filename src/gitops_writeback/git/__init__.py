"""Git write-back client.

Import from submodules:
- client: GitClient, create_git_client, ClientParams, CloneOptions, GitOptions
- url: validate_url, is_git_url, repo_name, parse_git_url
- commands: argument builders for each git subcommand
- errors: exception taxonomy
"""
