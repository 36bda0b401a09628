"""Repository change detection for git-branch-orchestrator.

The detector keeps one snapshot of (branch, HEAD). ``detect_changes``
compares the live repository against it; ``poll`` does so on a fixed interval
and publishes the resulting events onto a bounded queue.
"""

import queue
import threading
from datetime import datetime, timezone
from typing import List, Optional

from git_branch_orchestrator.exceptions import (
    GitOperationError,
    PollCancelledError,
    SnapshotRequiredError,
)
from git_branch_orchestrator.models.events import (
    BranchSwitchEvent,
    GitEvent,
    NewCommitEvent,
    Snapshot,
)
from git_branch_orchestrator.services.git.base import GitServiceBase
from git_branch_orchestrator.utils.cancellation import CancellationToken


class EventDetector(GitServiceBase):
    """Detects branch switches and new commits between observations.

    The detector is *unarmed* until ``take_snapshot`` runs and *armed*
    afterwards. Each snapshot replaces the previous one.
    """

    def __init__(self, *args, poll_interval: Optional[float] = None, **kwargs):
        super().__init__(*args, **kwargs)
        if poll_interval is None:
            poll_interval = self.config.poll_interval
        self.poll_interval = poll_interval
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")
        self._snapshot: Optional[Snapshot] = None
        self._snapshot_lock = threading.Lock()
        self._poll_handle: Optional["PollHandle"] = None

    @property
    def snapshot(self) -> Optional[Snapshot]:
        with self._snapshot_lock:
            return self._snapshot

    @property
    def armed(self) -> bool:
        return self.snapshot is not None

    def _observe(self) -> Snapshot:
        return Snapshot(branch=self._current_branch_or_empty(), head=self._head())

    def take_snapshot(self) -> Snapshot:
        """Record the current branch and HEAD as the comparison baseline."""
        snapshot = self._observe()
        with self._snapshot_lock:
            self._snapshot = snapshot
        branch = snapshot.branch or "(detached)"
        self.logger.debug(f"Snapshot: branch={branch} head={snapshot.head[:7]}")
        return snapshot

    def detect_changes(self, advance: bool = False) -> List[GitEvent]:
        """Compare the live repository with the snapshot.

        Args:
            advance: Replace the snapshot with the state just observed, so the
                next call reports only what changed after this one. When False
                the baseline stays until ``take_snapshot`` is called again.

        Returns:
            A BranchSwitchEvent when the branch changed and a NewCommitEvent
            when HEAD moved; both when both changed; empty when neither did.

        Raises:
            SnapshotRequiredError: No snapshot has been taken
        """
        baseline = self.snapshot
        if baseline is None:
            raise SnapshotRequiredError()

        observed = self._observe()
        now = datetime.now(timezone.utc)
        events: List[GitEvent] = []

        if observed.branch != baseline.branch:
            events.append(
                BranchSwitchEvent(
                    previous_branch=baseline.branch,
                    current_branch=observed.branch,
                    timestamp=now,
                )
            )
        if observed.head != baseline.head:
            events.append(
                NewCommitEvent(
                    previous_head=baseline.head,
                    current_head=observed.head,
                    timestamp=now,
                )
            )

        if advance:
            with self._snapshot_lock:
                self._snapshot = observed

        for event in events:
            self.logger.info(f"Detected {event.event_type.value}: {event}")
        return events

    def _publish(self, event: GitEvent, sink: queue.Queue, token: CancellationToken) -> None:
        # Block while the sink is full, but keep honoring cancellation
        while True:
            if token.cancelled:
                raise PollCancelledError(token.reason or "cancelled")
            try:
                sink.put(event, timeout=self.poll_interval)
                return
            except queue.Full:
                self.logger.warning(
                    f"Event queue full; holding {event.event_type.value} until a consumer catches up"
                )

    def poll(self, token: CancellationToken, sink: queue.Queue) -> None:
        """Publish changes onto ``sink`` every ``poll_interval`` seconds.

        Arms the detector first if needed. A failing detection pass is logged
        and retried on the next tick. Returns only by raising.

        Raises:
            PollCancelledError: ``token`` was cancelled or hit its deadline;
                detected within one interval
        """
        if not self.armed:
            self.take_snapshot()
        self.logger.debug(f"Polling every {self.poll_interval}s")

        while True:
            if token.cancelled:
                break
            if token.wait(self.poll_interval):
                break

            try:
                events = self.detect_changes(advance=True)
            except GitOperationError as e:
                self.logger.warning(f"Change detection failed, retrying next tick: {e}")
                continue

            for event in events:
                self._publish(event, sink, token)

        reason = token.reason or "cancelled"
        self.logger.debug(f"Polling stopped: {reason}")
        raise PollCancelledError(reason)

    def start(self, sink: Optional[queue.Queue] = None) -> "PollHandle":
        """Run ``poll`` on a background thread.

        Args:
            sink: Event queue; defaults to a bounded queue sized by config

        Raises:
            RuntimeError: A polling loop from this detector is still running
        """
        if self._poll_handle is not None and self._poll_handle.running:
            raise RuntimeError("Polling loop already running")
        if sink is None:
            sink = self.config.make_event_queue()
        # Arm in the caller's thread so changes made right after start() are seen
        if not self.armed:
            self.take_snapshot()
        self._poll_handle = PollHandle(self, sink)
        return self._poll_handle


class PollHandle:
    """A polling loop running on its own daemon thread."""

    def __init__(self, detector: EventDetector, sink: queue.Queue):
        self.detector = detector
        self.events = sink
        self.token = CancellationToken()
        self.error: Optional[BaseException] = None
        self._thread = threading.Thread(
            target=self._run,
            name=f"git-event-poll-{id(self)}",
            daemon=True,
        )
        self._thread.start()

    def _run(self) -> None:
        try:
            self.detector.poll(self.token, self.events)
        except PollCancelledError as e:
            self.error = e
        except Exception as e:
            self.error = e
            self.detector.logger.error(f"Polling loop crashed: {e}")

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def stop(self, timeout: Optional[float] = None) -> bool:
        """Cancel the loop and wait for the thread to exit.

        Returns:
            True if the thread finished within ``timeout``
        """
        self.token.cancel()
        self._thread.join(timeout)
        return not self._thread.is_alive()
