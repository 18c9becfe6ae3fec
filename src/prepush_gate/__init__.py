"""Git pre-push gate: raise the open file limit, then run the tests."""
