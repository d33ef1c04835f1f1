"""
Common utility functions for pojotize.
"""

# pylint: disable=line-too-long

import os
import re
import jinja2


def sanitize_identifier(name, fallback='field'):
    """
    Convert a JSON key into an identifier made of letters, digits and underscores.

    Characters outside [A-Za-z0-9_] are replaced with underscores and a leading
    digit is prefixed with an underscore. An empty name yields the fallback.

    Args:
        name (str): The name to convert.
        fallback (str): Name to use when nothing is left.

    Returns:
        str: The identifier.
    """
    val = re.sub(r'[^a-zA-Z0-9_]', '_', name)
    if not val:
        return fallback
    if re.match(r'^[0-9]', val):
        val = '_' + val
    return val


def is_identifier(name: str) -> bool:
    """Check whether the name is a plain ASCII identifier."""
    return bool(re.fullmatch(r'[A-Za-z_][A-Za-z0-9_]*', name or ''))


def capitalize_first(string: str) -> str:
    """Upper-case the first character and leave the rest of the string as is."""
    if not string:
        return string
    return string[0].upper() + string[1:]


def class_name_from_file(file_name: str) -> str:
    """
    Derive a class name from a file name.

    The extension is dropped, the base name is split at underscores, dashes
    and spaces, and each part is capitalized: ``user-profile_v2.json`` becomes
    ``UserProfileV2``. Names without any letter or digit, such as
    ``$.json``, become ``Document``.
    """
    base_name = os.path.splitext(os.path.basename(file_name))[0]
    parts = [p for p in re.split(r'[_\- ]', base_name) if p]
    class_name = sanitize_identifier(''.join(capitalize_first(p) for p in parts), fallback='Document')
    if not re.search(r'[A-Za-z0-9]', class_name):
        return 'Document'
    return class_name


def process_template(file_path: str, **kvargs) -> str:
    """
    Process a file as a Jinja2 template with the given object as input.

    Args:
        file_path (str): The path to the template, relative to the package directory.
        **kvargs: The variables to pass to the template.

    Returns:
        str: The processed template as a string.
    """
    # Load the template environment
    file_dir = os.path.dirname(__file__)
    template_loader = jinja2.FileSystemLoader(searchpath=file_dir)
    template_env = jinja2.Environment(loader=template_loader, keep_trailing_newline=True)
    template_env.filters['capitalize_first'] = capitalize_first

    # Load the template from the file
    template = template_env.get_template(file_path)

    # Render the template with the object as input
    output = template.render(**kvargs)

    return output


def render_template(template: str, output: str, **kvargs):
    """
    Render a template and write it to a file

    Args:
        template (str): The template to render.
        output (str): The output file path.
        **kvargs: The keyword arguments to pass to the template.

    Returns:
        None
    """
    out = process_template(template, **kvargs)
    # make sure the directory exists
    os.makedirs(os.path.dirname(output), exist_ok=True)
    with open(output, 'w', encoding='utf-8') as f:
        f.write(out)
