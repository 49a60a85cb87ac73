"""관리 스크립트 패키지 — Administrative one-off scripts."""
