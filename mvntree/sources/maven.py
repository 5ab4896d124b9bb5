import os
import subprocess
import logging
from typing import List, Optional

from mvntree.sources.base import ReportSource

MAVEN_TIMEOUT = int(os.environ.get("MVNTREE_MAVEN_TIMEOUT", "600"))
MAVEN_WRAPPER = "mvnw"
ERROR_TAIL_LINES = 20


class MavenSource(ReportSource):
    """Runs the dependency plugin on the project in the current directory."""

    def __init__(self, verbose: bool = False, extra_args: Optional[List[str]] = None) -> None:
        self.verbose = verbose
        self.extra_args = extra_args or []

    @property
    def name(self) -> str:
        return "Maven"

    @property
    def lock_files(self) -> List[str]:
        return ["pom.xml"]

    def build_command(self) -> List[str]:
        executable = "mvn"
        if os.path.exists(MAVEN_WRAPPER):
            executable = os.path.join(".", MAVEN_WRAPPER)

        cmd = [executable, "-B", "dependency:tree"]
        if self.verbose:
            # Keeps the "omitted for ..." entries in the report
            cmd.append("-Dverbose")
        return cmd + self.extra_args

    def read_report(self) -> str:
        cmd = self.build_command()
        logging.debug(f"Running {' '.join(cmd)} ...")

        try:
            output = subprocess.check_output(
                cmd,
                text=True,
                timeout=MAVEN_TIMEOUT,
                stderr=subprocess.STDOUT
            )
        except FileNotFoundError:
            logging.error(f"Maven executable not found: {cmd[0]}")
            raise Exception(f"Maven executable not found: {cmd[0]}")
        except subprocess.TimeoutExpired:
            logging.error(f"Maven timed out after {MAVEN_TIMEOUT}s")
            raise Exception(f"Maven did not finish within {MAVEN_TIMEOUT} seconds.")
        except subprocess.CalledProcessError as e:
            tail = "\n".join((e.output or "").splitlines()[-ERROR_TAIL_LINES:])
            logging.error(f"Maven Error {e.returncode}: {tail}")
            raise Exception(f"Fail to read Maven dependencies (exit {e.returncode}):\n{tail}")

        logging.debug(f"Report obtained. {len(output)} bytes.")
        return output
