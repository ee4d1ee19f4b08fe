"""Template renderer: copy a template and substitute literal placeholders."""

import logging
import os
import secrets

from postalctl.errors import TemplateMissingError

logger = logging.getLogger(__name__)

SECRET_KEY_BYTES = 128


def generate_secret_key():
    """Return 128 random bytes as 256 lowercase hex characters."""
    return secrets.token_hex(SECRET_KEY_BYTES)


def substitute(text, replacements):
    """Replace every occurrence of each placeholder, in insertion order."""
    for placeholder, value in replacements.items():
        text = text.replace(placeholder, value)
    return text


def render_template(template_path, dest_path, replacements=None, dry_run=False):
    """Copy *template_path* to *dest_path*, substituting *replacements*.

    The template itself is never modified. The destination is created or
    overwritten.

    Raises:
        TemplateMissingError: the template does not exist.
    """
    if not os.path.isfile(template_path):
        raise TemplateMissingError(f"Template not found: {template_path}")

    with open(template_path) as f:
        content = substitute(f.read(), replacements or {})

    if dry_run:
        logger.info(f"[dry-run] write {dest_path}")
        return content

    os.makedirs(os.path.dirname(dest_path) or ".", exist_ok=True)
    with open(dest_path, "w") as f:
        f.write(content)
    return content


def write_file(path, content, mode=0o644, dry_run=False):
    """Write bytes or text to *path* and set its permission bits."""
    if dry_run:
        logger.info(f"[dry-run] write {path}")
        return
    data = content.encode() if isinstance(content, str) else content
    with open(path, "wb") as f:
        f.write(data)
    os.chmod(path, mode)
