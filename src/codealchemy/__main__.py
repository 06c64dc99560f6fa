from .app import main

if __name__ == "__main__":  # pragma: no cover - manual launch path
    main()
