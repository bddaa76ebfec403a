"""Deal with configuration file."""
import json
import logging
import os
from dataclasses import dataclass
from io import StringIO
from pathlib import Path
from typing import (
    Any,
    Dict,
    List,
    Mapping,
    MutableMapping,
    Optional,
    Tuple,
    Union,
)

import toml

# Order matters here. Local should take precedence over global.
CONFIG_PATHS = [
    Path("~/.config/ec2runner.toml").expanduser(),
    Path("/etc/ec2runner.toml"),
]

DEFAULT_GITHUB_URL = "https://github.com"

ConfigFile = Union[Path, StringIO]
log = logging.getLogger(__name__)


class Config(dict):
    """Override dict to allow raising a more meaningful KeyError."""

    def __getitem__(self, key):
        """Provide more meaningful KeyError on access."""
        try:
            return super().__getitem__(key)
        except KeyError:
            raise KeyError(
                "{} must be defined in ec2runner.toml to make this "
                "call".format(key)
            ) from None


def parse_config(
    config_file: Optional[ConfigFile] = None,
) -> MutableMapping[str, Any]:
    """Find the relevant TOML, load, and return it."""
    possible_configs = []
    if config_file:
        possible_configs.append(config_file)
    if os.environ.get("EC2RUNNER_CONFIG"):
        possible_configs.append(Path(os.environ["EC2RUNNER_CONFIG"]))
    possible_configs.extend(CONFIG_PATHS)
    for path in possible_configs:
        try:
            config = toml.load(path, _dict=Config)
            log.debug("Loaded configuration from %s", path)
            return config
        except FileNotFoundError:
            continue
        except toml.TomlDecodeError as e:
            raise ValueError(
                "Could not parse configuration file pointed to by "
                "{}".format(path)
            ) from e
    raise ValueError(
        "No configuration file found! Copy ec2runner.toml.template to "
        "~/.config/ec2runner.toml or /etc/ec2runner.toml"
    )


def _unset_if_empty(value):
    if value == "":
        return None
    return value


def parse_tags(tags) -> Tuple[Dict[str, str], ...]:
    """Normalize resource tags into a tuple of Key/Value dicts.

    Args:
        tags: None, a JSON string or a list of mappings, each holding
            ``Key`` and ``Value``

    Returns:
        tuple of {"Key": ..., "Value": ...} dicts

    """
    if not tags:
        return ()
    if isinstance(tags, str):
        try:
            tags = json.loads(tags)
        except json.JSONDecodeError as e:
            raise ValueError("Tags must be a JSON list: {}".format(tags)) from e
    if not isinstance(tags, list):
        raise ValueError("Tags must be a list, found: {!r}".format(tags))
    parsed = []
    for tag in tags:
        try:
            parsed.append({"Key": str(tag["Key"]), "Value": str(tag["Value"])})
        except (KeyError, TypeError) as e:
            raise ValueError(
                "Each tag needs a Key and a Value, found: {!r}".format(tag)
            ) from e
    return tuple(parsed)


@dataclass(frozen=True)
class RunnerConfig:
    """Settings shared by every runner lifecycle operation.

    Built once at startup and passed explicitly to the script builder and
    to the EC2 lifecycle controller.
    """

    owner: Optional[str] = None
    repo: Optional[str] = None
    image_id: Optional[str] = None
    instance_type: Optional[str] = None
    iam_role_name: Optional[str] = None
    github_url: str = DEFAULT_GITHUB_URL
    runner_home_dir: Optional[str] = None
    pre_runner_script: str = ""
    tags: Tuple[Dict[str, str], ...] = ()
    instance_id: Optional[str] = None

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        environ: Optional[Mapping[str, str]] = None,
    ) -> "RunnerConfig":
        """Build a RunnerConfig from the ``[runner]`` table of a config.

        ``github_url`` and ``repository`` fall back to the GitHub Actions
        variables GITHUB_SERVER_URL and GITHUB_REPOSITORY. The repository
        may stay unset; only launching a runner needs it.

        Args:
            config: parsed configuration, as returned by parse_config
            environ: environment mapping, defaults to os.environ

        Returns:
            RunnerConfig instance

        """
        if environ is None:
            environ = os.environ
        section = config.get("runner", {})

        repository = _unset_if_empty(
            section.get("repository")
        ) or environ.get("GITHUB_REPOSITORY")
        owner = repo = None
        if repository:
            parts = repository.split("/")
            if len(parts) != 2 or not all(parts):
                raise ValueError(
                    "repository must be given as <owner>/<repo>, found: "
                    "{!r}".format(repository)
                )
            owner, repo = parts

        github_url = (
            _unset_if_empty(section.get("github_url"))
            or environ.get("GITHUB_SERVER_URL")
            or DEFAULT_GITHUB_URL
        )
        return cls(
            owner=owner,
            repo=repo,
            image_id=_unset_if_empty(section.get("image_id")),
            instance_type=_unset_if_empty(section.get("instance_type")),
            iam_role_name=_unset_if_empty(section.get("iam_role_name")),
            github_url=github_url,
            runner_home_dir=_unset_if_empty(section.get("runner_home_dir")),
            pre_runner_script=section.get("pre_runner_script") or "",
            tags=parse_tags(section.get("tags")),
            instance_id=_unset_if_empty(section.get("instance_id")),
        )

    @property
    def tag_specifications(self) -> List[Dict[str, Any]]:
        """Tag specifications for run_instances, empty if no tags are set."""
        if not self.tags:
            return []
        tags = [dict(tag) for tag in self.tags]
        return [
            {"ResourceType": "instance", "Tags": tags},
            {"ResourceType": "volume", "Tags": tags},
        ]
