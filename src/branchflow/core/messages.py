"""User-facing message catalog.

Messages are looked up by dotted key (``"actions.commit"``) and formatted with
``str.format`` keyword parameters. Unknown keys render as the key itself so a
missing translation never breaks a prompt.
"""

from typing import Any

DEFAULT_LOCALE = "en"

CATALOGS: dict[str, dict[str, dict[str, str]]] = {
    "en": {
        "actions": {
            "check": "check",
            "status": "status",
            "commit": "commit",
            "rebase": "rebase",
            "setup": "setup",
            "helpers": "helpers",
            "exit": "exit",
            "switch-branch": "switch branch",
            "new branch": "new branch",
            "sync branch": "sync branch",
            "release": "release",
            "sync": "sync",
            "helpers:remove-stale-branches": "remove stale branches",
            "helpers:clean-up": "clean up",
        },
        "title": {
            "chooseAction": "Choose an action",
            "chooseHelper": "Choose a helper",
            "chooseBranch": "Choose a branch to {action}",
            "chooseBranchType": "Choose a branch type",
            "branchName": "Branch name",
            "commitMessage": "Commit message",
            "releaseType": "Choose a release type",
            "done": "Done",
        },
        "status": {
            "currentBranch": "current branch",
            "noCommit": "Nothing to commit, working tree clean",
            "protectedBranch": "Current branch is being protected, cannot commit manually",
            "flowNotFound": "Flow '{current}' not found, falling back to '{default}'",
            "conflictsFound": "conflicts found:",
            "conflictStringsFound": "conflicts string found:",
            "conflictsResolved": "If conflicts have been resolved, proceed to the next step",
            "notRepository": 'This is not a git repository. "git init" now ?',
            "tagExists": "Tag '{tag}' already exists, input another version",
            "noBranchTo": "You have no branch to {action}",
            "noStaleBranch": "no stale branch",
            "staleBranchesRemoved": "stale branches {branches} removed",
            "bumpFailed": "Version bump failed with message: {message}",
            "rebaseInProgress": "A rebase is in progress",
        },
    },
}


def t(key: str, locale: str = DEFAULT_LOCALE, **params: Any) -> str:
    """Translate a dotted message key, interpolating keyword parameters.

    Only the first dot separates section from name, so action keys containing
    dots or spaces still resolve.

    Example:
        >>> t("status.tagExists", tag="v1.0.0")
        "Tag 'v1.0.0' already exists, input another version"
    """
    catalog = CATALOGS.get(locale, CATALOGS[DEFAULT_LOCALE])
    section, _, name = key.partition(".")
    template = catalog.get(section, {}).get(name)
    if template is None:
        return key
    return template.format(**params) if params else template
