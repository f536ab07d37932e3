import logging

from kohonen_map import HexaSOM, RectSOM


def run_som_example():
    """
    Demonstrates the basic usage of the kohonen_map library.
    """
    print("--- Running SOM Example ---")

    # 1. A rectangular map of 5x6 neurons for 3-dimensional samples
    som = RectSOM(output_dim="5x6", input_dim=3, random_seed=42)
    print(f"Created {som}, radius {som.radius()}")

    # 2. Random initialization, components in [-0.5, 0.5)
    som.initialize()
    initial_weights = som.get_weights()

    # 3. Train on three well separated vectors
    samples = ([3, 2, 4], [-1, -1, -1], [0, 4, -3])
    epochs = som.train(300, *samples)
    print(f"Trained for {epochs} epochs")

    for v in samples:
        x, y, d = som.bmu(v)
        print(f"  {v} -> BMU @ ({x}, {y}), distance {d:.3f}")

    moved = (som.get_weights() - initial_weights).abs().max().item()
    print(f"Largest component change: {moved:.3f}")
    print(f"Quantization error: {som.quantization_error(samples):.4f}")

    print("\nComponent planes:")
    print(som.as_string())

    # 4. A hexagonal map, zeroed, with one neuron set by hand
    hexa = HexaSOM(output_dim=6, input_dim=4)
    hexa.initialize([0, 0, 0, 0])
    hexa.value(3, 2, [1, 1, 1, 1])
    print(f"{hexa}: neighbours of (3, 2) within 1 -> {[(x, y) for x, y, _ in hexa.neighbors(1, 3, 2)]}")

    print("\n--- SOM Example Finished ---")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_som_example()
