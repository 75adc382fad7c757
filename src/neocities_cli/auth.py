"""Selection of the site name and credential for a request."""

from __future__ import annotations

import logging
from typing import Any, Callable

import click

from neocities_cli.exceptions import MissingCredentialError, MissingSiteError
from neocities_cli.models import Config, Credential, KeyCredential, PasswordCredential

logger = logging.getLogger(__name__)

Prompt = Callable[..., Any]


def select_site(
    site: str | None,
    config: Config,
    *,
    no_interactive: bool = False,
    prompt: Prompt = click.prompt,
) -> str:
    """Determine the site to operate on.

    Order: explicit site, config default site, interactive prompt.

    Raises:
        MissingSiteError: If no site is known and prompting is not possible
    """
    if site:
        return site
    if config.default_site:
        logger.debug(f"Using default site from config: {config.default_site}")
        return config.default_site
    if no_interactive:
        raise MissingSiteError("No site given and no default site configured")

    try:
        reply = prompt("Site")
    except click.Abort as e:
        raise MissingSiteError("No site entered") from e
    if not reply:
        raise MissingSiteError("No site entered")
    return str(reply)


def select_credential(
    site: str,
    password: str | None,
    config: Config,
    *,
    user: str | None = None,
    no_interactive: bool = False,
    prompt: Prompt = click.prompt,
) -> Credential:
    """Determine the credential for a site.

    Order: explicit password, credential stored in config for the site,
    masked interactive prompt. Password credentials use the site name as
    username unless user is given.

    Raises:
        MissingCredentialError: If no credential is known and prompting is
            not possible
    """
    username = user or site

    if password:
        logger.debug("Using password given on the command line")
        return PasswordCredential(user=username, password=password)

    stored = config.sites.get(site)
    if isinstance(stored, KeyCredential):
        logger.debug(f"Using API key from config for {site}")
        return stored
    if isinstance(stored, PasswordCredential):
        logger.debug(f"Using password from config for {site}")
        return PasswordCredential(user=username, password=stored.password)

    if no_interactive:
        raise MissingCredentialError(f"No password or API key available for site '{site}'")

    logger.debug("Prompting for password")
    try:
        reply = prompt(f"Password for {username}", hide_input=True)
    except click.Abort as e:
        raise MissingCredentialError("No password entered") from e
    if not reply:
        raise MissingCredentialError("No password entered")
    return PasswordCredential(user=username, password=str(reply))


def resolve_auth(
    config: Config,
    *,
    site: str | None = None,
    user: str | None = None,
    password: str | None = None,
    no_interactive: bool = False,
    prompt: Prompt = click.prompt,
) -> tuple[str, Credential]:
    """Resolve both the site name and its credential.

    Returns (site_name, credential).
    """
    site_name = select_site(site, config, no_interactive=no_interactive, prompt=prompt)
    credential = select_credential(
        site_name,
        password,
        config,
        user=user,
        no_interactive=no_interactive,
        prompt=prompt,
    )
    return site_name, credential
