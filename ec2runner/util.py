# This file is part of ec2runner. See LICENSE file for license information.
"""Helpers shared by the command line and the lifecycle code."""

import logging
import random
import string

LABEL_LENGTH = 5

log = logging.getLogger(__name__)


def generate_unique_label(length=LABEL_LENGTH):
    """Return a random lowercase alphanumeric runner label.

    Args:
        length: number of characters in the label

    Returns:
        label string

    """
    alphabet = string.ascii_lowercase + string.digits
    return "".join(random.choice(alphabet) for _ in range(length))


def write_github_outputs(path, outputs):
    """Append name=value pairs to the GitHub Actions output file.

    Args:
        path: path of the file named by $GITHUB_OUTPUT
        outputs: mapping of output names to values
    """
    log.debug("writing outputs %s to %s", ", ".join(outputs), path)
    with open(path, "a", encoding="utf-8") as output_file:
        for name, value in outputs.items():
            output_file.write("{}={}\n".format(name, value))
