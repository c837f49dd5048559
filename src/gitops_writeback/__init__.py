"""gitops-writeback: clone, mutate, commit and push git repositories.

The library entry point is `gitops_writeback.git.client.create_git_client`.
See `gitops-writeback --help` for the operator CLI.
"""
