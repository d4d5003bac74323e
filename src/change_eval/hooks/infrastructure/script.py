"""ScriptHook — runs a configured command as a lifecycle hook."""

import asyncio
import time
from typing import NoReturn

from change_eval.config.domain.hooks import HookConfig
from change_eval.core.env import build_subprocess_env
from change_eval.hooks.domain.hook import HookContext, HookOutcome
from change_eval.hooks.domain.observer import HookObserver
from change_eval.hooks.infrastructure.errors import HookError

_HOOK_PASSTHROUGH: tuple[str, ...] = ("PATH", "HOME", "LANG")


class ScriptHook:
    """Runs ``command args...`` in the modified tree with an explicit environment.

    The child sees PATH/HOME/LANG from the host, the run's locations as
    RUN_ID, MODIFIED_DIR, ARTIFACTS_DIR and RESULTS_PATH, plus the hook's own
    configured ``env``.
    """

    def __init__(self, config: HookConfig, observer: HookObserver) -> None:
        self._config = config
        self._observer = observer

    @property
    def name(self) -> str:
        return self._config.name

    def build_env(self, context: HookContext) -> dict[str, str]:
        run_vars = {
            "RUN_ID": context.run_id,
            "HOOK_PHASE": context.phase.value,
            "MODIFIED_DIR": str(context.modified_dir),
            "ARTIFACTS_DIR": str(context.artifacts_dir),
        }
        if context.results_path is not None:
            run_vars["RESULTS_PATH"] = str(context.results_path)
        return build_subprocess_env(
            passthrough=_HOOK_PASSTHROUGH, extra={**run_vars, **self._config.env}
        )

    async def run(self, context: HookContext) -> HookOutcome:
        """
        Raises:
            HookError: if the command cannot start, exits non-zero, or times out.
        """
        phase = context.phase.value
        self._observer.hook_started(name=self.name, phase=phase)
        start = time.monotonic()
        try:
            proc = await asyncio.create_subprocess_exec(
                self._config.command,
                *self._config.args,
                cwd=context.modified_dir,
                env=self.build_env(context),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as exc:
            self._fail(phase, f"cannot start {self._config.command}: {exc}", exc)

        try:
            async with asyncio.timeout(self._config.timeout_seconds):
                output, _ = await proc.communicate()
        except TimeoutError as exc:
            proc.kill()
            await proc.wait()
            self._fail(
                phase, f"timed out after {self._config.timeout_seconds:g}s", exc
            )
        except asyncio.CancelledError:
            if proc.returncode is None:
                proc.kill()
                await proc.wait()
            raise

        if proc.returncode != 0:
            tail = output.decode("utf-8", errors="replace").strip()[-500:]
            self._fail(phase, f"exit code {proc.returncode}: {tail}")

        duration_ms = int((time.monotonic() - start) * 1000)
        self._observer.hook_completed(
            name=self.name, phase=phase, duration_ms=duration_ms
        )
        return HookOutcome(
            name=self.name,
            phase=context.phase,
            success=True,
            exit_code=proc.returncode,
            duration_ms=duration_ms,
        )

    def _fail(
        self, phase: str, reason: str, cause: BaseException | None = None
    ) -> NoReturn:
        self._observer.hook_failed(name=self.name, phase=phase, reason=reason)
        raise HookError(name=self.name, reason=reason) from cause
