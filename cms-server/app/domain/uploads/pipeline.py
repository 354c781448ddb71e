"""Named pre/post hooks invoked around the core upload call."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional, Sequence, TypeVar

from .models import UploadContext

logger = logging.getLogger(__name__)

HookFn = Callable[[UploadContext], Awaitable[None]]
ErrorHookFn = Callable[[UploadContext, BaseException], Awaitable[None]]
ResultT = TypeVar("ResultT")


@dataclass(slots=True, frozen=True)
class UploadHook:
    name: str
    before: Optional[HookFn] = None
    after: Optional[HookFn] = None
    on_error: Optional[ErrorHookFn] = None


@dataclass(slots=True)
class UploadPipeline:
    """Ordered hooks; ``before`` hooks run first to last, ``after`` hooks last to first."""

    hooks: list[UploadHook] = field(default_factory=list)

    def __post_init__(self) -> None:
        names = [hook.name for hook in self.hooks]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate upload hook names: {names}")

    @property
    def names(self) -> list[str]:
        return [hook.name for hook in self.hooks]

    def register(self, hook: UploadHook) -> None:
        if hook.name in self.names:
            raise ValueError(f"upload hook {hook.name!r} already registered")
        self.hooks.append(hook)

    async def run(
        self,
        context: UploadContext,
        core: Callable[[UploadContext], Awaitable[Sequence[ResultT]]],
    ) -> list[ResultT]:
        for hook in self.hooks:
            if hook.before is not None:
                await hook.before(context)

        try:
            results = list(await core(context))
        except Exception as exc:
            for hook in reversed(self.hooks):
                if hook.on_error is not None:
                    await hook.on_error(context, exc)
            raise

        context.results = list(results)
        for hook in reversed(self.hooks):
            if hook.after is not None:
                await hook.after(context)
        return results
