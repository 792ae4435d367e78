"""Item lifecycle and mastery progression rules."""
