"""
Undo/Redo History Manager for the Pixel Sprite Editor

Manages state history with undo/redo functionality.
Keeps two stacks of snapshots: `past` (states before each undoable
action, newest last) and `future` (states undone, next redo first).

Snapshots are immutable records whose buffers are frozen and shared, so
the manager stores them as-is instead of deep-copying.
"""

import logging


class HistoryManager:
    """Manages undo/redo history with state snapshots"""

    def __init__(self, max_history=50):
        """
        Initialize the history manager

        Args:
            max_history: Maximum number of states kept in `past`
        """
        self.max_history = max_history
        self.past = []  # [{'data': snapshot, 'description': str}], oldest first
        self.future = []  # Undone states, next redo first
        self._listeners = []  # Callbacks to notify on state changes
        self._logger = logging.getLogger('History')

    def save_state(self, state_data, description=""):
        """
        Record the state as it was BEFORE an undoable action

        Clears the redo stack and evicts the oldest entry past max_history.

        Args:
            state_data: Immutable snapshot of the editable state
            description: Description of the action about to be applied
        """
        self.past.append({
            'data': state_data,
            'description': description
        })
        self.future.clear()

        # Trim history if it exceeds max_history
        if len(self.past) > self.max_history:
            evicted = self.past.pop(0)
            self._logger.debug(f"Evicted oldest state: {evicted['description']}")

        self._notify_listeners()

        self._logger.debug(f"State saved: {description} (past: {len(self.past)}, future: 0)")

    def undo(self, current_state):
        """
        Step back one state

        Args:
            current_state: Snapshot of the present, pushed onto `future`

        Returns:
            The snapshot to restore, or None if there is nothing to undo
        """
        if not self.can_undo():
            self._logger.debug("Cannot undo - at beginning of history")
            return None

        entry = self.past.pop()
        self.future.insert(0, {
            'data': current_state,
            'description': entry['description']
        })

        self._notify_listeners()

        self._logger.debug(f"Undo: {entry['description']} (past: {len(self.past)}, future: {len(self.future)})")
        return entry['data']

    def redo(self, current_state):
        """
        Step forward one state

        Args:
            current_state: Snapshot of the present, pushed onto `past`

        Returns:
            The snapshot to restore, or None if there is nothing to redo
        """
        if not self.can_redo():
            self._logger.debug("Cannot redo - at end of history")
            return None

        entry = self.future.pop(0)
        self.past.append({
            'data': current_state,
            'description': entry['description']
        })
        if len(self.past) > self.max_history:
            self.past.pop(0)

        self._notify_listeners()

        self._logger.debug(f"Redo: {entry['description']} (past: {len(self.past)}, future: {len(self.future)})")
        return entry['data']

    def can_undo(self):
        """Check if undo is available"""
        return len(self.past) > 0

    def can_redo(self):
        """Check if redo is available"""
        return len(self.future) > 0

    def clear(self):
        """Clear all history"""
        self.past = []
        self.future = []
        self._notify_listeners()
        self._logger.debug("History cleared")

    def add_listener(self, callback):
        """
        Add a listener to be notified when history state changes

        Args:
            callback: Function to call when history changes (receives can_undo, can_redo)
        """
        self._listeners.append(callback)

    def remove_listener(self, callback):
        """Remove a listener"""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify_listeners(self):
        """Notify all listeners of history state change"""
        for callback in self._listeners:
            try:
                callback(self.can_undo(), self.can_redo())
            except Exception as e:
                self._logger.error(f"Error notifying listener: {e}")

    def get_undo_description(self):
        """Get the description of the action undo would revert"""
        if self.can_undo():
            return self.past[-1]['description']
        return ""

    def get_redo_description(self):
        """Get the description of the action redo would reapply"""
        if self.can_redo():
            return self.future[0]['description']
        return ""
