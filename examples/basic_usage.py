"""Basic usage examples."""
from batch_resizer import BatchResizer, CancellationToken

# --- Example 1: Halve every image, one file at a time ---
resizer = BatchResizer(preset="low_memory")
resizer.run("examples/images", "examples/output/half", 0.5)

# --- Example 2: Concurrent run with custom settings ---
resizer = BatchResizer(
    config={
        "batch": {
            "mode": "concurrent",
            "max_workers": 8,
        },
        "codec": {
            "backend": "opencv",
        },
    }
)
result = resizer.run("examples/images", "examples/output/quarter", 0.25)
print(f"Wrote {len(result.outputs)} files in {result.elapsed:.2f}s")

# --- Example 3: Start in the background and cancel ---
token = CancellationToken()
future = resizer.submit("examples/images", "examples/output/third", 1 / 3, token)
token.cancel()
try:
    future.result()
except Exception as e:
    print(f"Stopped: {e!r}")

# --- Example 4: Purge previous output ---
resizer.clean("examples/output")
