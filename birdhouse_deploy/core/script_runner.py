"""Pre- and post-release script execution"""

import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from ..constants import ErrorCode, SCRIPT_INTERPRETERS
from ..models.result import OperationStatus, Result

logger = logging.getLogger(__name__)


class ScriptRunner:
    """Runs project scripts one after another as subprocesses

    A failing script is logged and recorded, the remaining scripts still run.
    """

    def __init__(self, project_root: Path, env: Optional[Dict[str, str]] = None):
        """Initialize script runner

        Args:
            project_root: Working directory of the scripts
            env: Extra environment variables passed to every script
        """
        self.project_root = project_root
        self.env = env or {}

    def build_command(self, script_path: Path) -> List[str]:
        """Command line that executes ``script_path``"""
        suffix = script_path.suffix.lower()
        if suffix == '.py':
            return [sys.executable, str(script_path)]
        if suffix in SCRIPT_INTERPRETERS:
            return SCRIPT_INTERPRETERS[suffix] + [str(script_path)]
        return [str(script_path)]

    async def run_script(self, script: str) -> bool:
        """Run one script

        Args:
            script: Script path relative to the project root

        Returns:
            True if the script exited with status 0
        """
        script_path = (self.project_root / script).resolve()
        if not script_path.is_file():
            logger.error(f"Script not found: {script}")
            return False

        env = os.environ.copy()
        env.update(self.env)

        logger.info(f"Running script: {script}")
        try:
            process = await asyncio.create_subprocess_exec(
                *self.build_command(script_path),
                cwd=str(self.project_root),
                env=env,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
            stdout, stderr = await process.communicate()
        except OSError as e:
            logger.error(f"Failed to execute script {script}: {e}")
            return False

        if stdout:
            logger.info(f"{script}: {stdout.decode(errors='replace').strip()}")
        if stderr:
            logger.warning(f"{script}: {stderr.decode(errors='replace').strip()}")

        if process.returncode != 0:
            logger.error(f"Script {script} exited with status {process.returncode}")
            return False
        return True

    async def run_all(self, scripts: List[str]) -> Result:
        """Run ``scripts`` sequentially

        Returns:
            Result listing the failed scripts as errors
        """
        result = Result(status=OperationStatus.IN_PROGRESS)

        if not scripts:
            result.complete(OperationStatus.SKIPPED)
            return result

        for script in scripts:
            if not await self.run_script(script):
                result.add_error(ErrorCode.SCRIPT_FAILED, f"Script failed: {script}", script=script)

        if not result.errors:
            status = OperationStatus.SUCCESS
        elif len(result.errors) < len(scripts):
            status = OperationStatus.PARTIAL
        else:
            status = OperationStatus.FAILED
        result.complete(status)
        return result
