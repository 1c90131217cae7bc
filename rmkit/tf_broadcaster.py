"""Non-blocking broadcasters of coordinate-frame transforms."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, ClassVar, Iterable, Union

Vector3 = tuple[float, float, float]
Quaternion = tuple[float, float, float, float]


@dataclass
class TransformStamped:
    """Pose of ``child_frame_id`` in ``frame_id`` at time ``stamp``."""

    frame_id: str
    child_frame_id: str
    translation: Vector3 = (0.0, 0.0, 0.0)
    rotation: Quaternion = (0.0, 0.0, 0.0, 1.0)
    stamp: float = 0.0


Transforms = Union[TransformStamped, Iterable[TransformStamped]]
Publish = Callable[[list], None]


def _as_list(transforms: Transforms) -> list[TransformStamped]:
    if isinstance(transforms, TransformStamped):
        return [transforms]
    return list(transforms)


class _TryLockPublisher:
    def __init__(self, publish: Publish) -> None:
        self._publish = publish
        self._lock = threading.Lock()

    def try_publish(self, message: list) -> bool:
        if not self._lock.acquire(blocking=False):
            return False
        try:
            self._publish(message)
        finally:
            self._lock.release()
        return True


class TfBroadcaster:
    """Publishes each batch of transforms; a batch is dropped if a publish is in progress."""

    TOPIC: ClassVar[str] = "/tf"
    LATCHED: ClassVar[bool] = False

    def __init__(self, publish: Publish) -> None:
        self._publisher = _TryLockPublisher(publish)

    def send_transform(self, transforms: Transforms) -> bool:
        """Publish one transform or many; returns whether it was published."""
        return self._publisher.try_publish(_as_list(transforms))


class StaticTfBroadcaster:
    """Keeps every static transform ever sent, one per child frame, and republishes them all."""

    TOPIC: ClassVar[str] = "/tf_static"
    LATCHED: ClassVar[bool] = True

    def __init__(self, publish: Publish) -> None:
        self._publisher = _TryLockPublisher(publish)
        self._transforms: list[TransformStamped] = []

    @property
    def transforms(self) -> list[TransformStamped]:
        return list(self._transforms)

    def send_transform(self, transforms: Transforms) -> bool:
        """Merge by child frame, then publish the full set; returns whether it was published."""
        for transform in _as_list(transforms):
            for i, known in enumerate(self._transforms):
                if known.child_frame_id == transform.child_frame_id:
                    self._transforms[i] = transform
                    break
            else:
                self._transforms.append(transform)
        return self._publisher.try_publish(list(self._transforms))