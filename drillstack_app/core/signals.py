"""
Central Signal Registry for the practice engine.

Uses blinker so the UI layer can observe sessions without the
controllers knowing anything about rendering.

Usage:
    # Publisher (controller)
    from drillstack_app.core.signals import snapshot_changed
    snapshot_changed.send(self, snapshot=self.snapshot())

    # Subscriber (UI layer)
    @snapshot_changed.connect_via(controller)
    def on_snapshot(sender, snapshot, **kwargs):
        ...
"""
from blinker import Namespace

# Create namespace for practice-related signals
practice_signals = Namespace()

# Signal: Fired when a controller initializes a new session
# Payload includes: mode, total
session_started = practice_signals.signal('session_started')

# Signal: Fired after every graded learner action (answer, option, card pair)
# Payload includes: mode, word_id, is_correct, outcome
answer_evaluated = practice_signals.signal('answer_evaluated')

# Signal: Fired whenever the render-relevant snapshot changes
# Payload includes: snapshot
snapshot_changed = practice_signals.signal('snapshot_changed')

# Signal: Fired when a session runs out of words
# Payload includes: mode, correct, total
session_completed = practice_signals.signal('session_completed')

# Signal: Fired when the language service could not play a prompt
# Payload includes: mode, word_id, error
audio_failed = practice_signals.signal('audio_failed')

# Signal: Fired by PracticeHub after the active mode changes
# Payload includes: previous, mode
mode_switched = practice_signals.signal('mode_switched')
