import logging
import os
import pathlib

import bijective._assertions as assertions
import bijective._models as models
import bijective._problem as problem
import bijective._util as util

CHECK_REASON = "check {0} requires it"
logger = logging.getLogger(__name__)


def find_check_description(name):
    if "/" in name or name.endswith(".toml"):
        return pathlib.Path(name)

    path = pathlib.Path.cwd()
    home = pathlib.Path.home()

    while path != home:
        check_file = path / ".bijective" / f"{name}.toml"
        if check_file.is_file():
            return check_file

        if path != path.parent:
            path = path.parent
        else:
            # we're at '/', stop loop
            path = home

    config_home = pathlib.Path(os.environ.get("XDG_CONFIG_HOME", home / ".config"))
    check_file = config_home / "bijective" / f"{name}.toml"
    if not check_file.is_file():
        raise ValueError(f"No check description file exists for name {name}")

    return check_file


def load_check(name):
    check_file = find_check_description(name)
    logger.debug('Loading check description "%s"', check_file)

    content = util.toml_loads(check_file.read_text())
    check = models.CheckDesc.init_recursive(**content)
    if not check.name:
        check.name = check_file.stem

    return check


def run_check(check):
    return problem.MatchingProblem(check.predicates, check.elements).solve()


def assert_check(check):
    return assertions.satisfy(
        check.elements,
        check.predicates,
        because=CHECK_REASON,
        because_args=(check.name,),
    )
