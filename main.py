# main.py
"""
Main entry point for a procedural generation session.

This script orchestrates one complete session:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Creates the session's single RandomStream.
4. Runs every generator in turn and logs a summary of its output.
5. Optionally reports a performance profile.

Outputs are handed to no renderer here; the summaries make a run's
content visible in the log and let two runs with the same seed be compared.
"""
import logging
import cProfile
import pstats
import io
import sys
from typing import Any, Dict, Optional

import numpy as np

from utils import setup_logging, load_config, text_entropy, hash_str


def run_session(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Runs every generator from one seeded stream.

    Returns:
        Dict[str, Any]: The generated outputs, keyed by generator.
    """
    from random_stream import RandomStream
    from noise_field import perlin_noise
    from flow_field import flow_field
    from simulation import simulate_particles
    from automaton import run_automaton
    from lsystem import lsystem
    from palette import build_palette

    session_params = config.get('session', {})
    noise_params = config.get('noise', {})
    flow_params = config.get('flow_field', {})
    particle_params = config.get('particles', {})
    automaton_params = config.get('automaton', {})
    lsystem_params = config.get('lsystem', {})
    palette_params = config.get('palette', {})
    run_params = config.get('run_control', {})
    log_throttle = run_params.get('log_throttle_steps', 30)

    # One stream for the whole session; generators never create their own.
    stream = RandomStream(session_params.get('seed'))
    logging.info(f"Session seed: {stream.seed}")

    # --- Noise ---
    noise = perlin_noise(
        stream,
        noise_params.get('width', 64),
        noise_params.get('height', 64),
        freq=noise_params.get('freq', 6),
        amp=noise_params.get('amp', 1.0),
    )
    logging.info(f"Noise grid {noise.shape[1]}x{noise.shape[0]} | Mean value: {noise.mean():.4f}")

    # --- Flow field and particles ---
    field = flow_field(
        stream,
        flow_params.get('width', 160),
        flow_params.get('height', 90),
        flow_params.get('scale', 4),
    )
    frames = simulate_particles(
        stream,
        particle_params.get('count', 200),
        field,
        frames=particle_params.get('frames', 120),
        log_throttle=log_throttle,
    )

    # --- Cellular automaton ---
    automaton = run_automaton(
        stream,
        automaton_params.get('width', 64),
        automaton_params.get('height', 64),
        automaton_params.get('iterations', 40),
        log_throttle=log_throttle,
    )
    population = [int(snapshot.sum()) for snapshot in automaton.snapshots]
    logging.debug(f"Automaton population per generation: {population}")

    # --- L-system ---
    rules = lsystem_params.get('rules', {'F': 'F+F--F+F'})
    iterations = lsystem_params.get('iterations', 3)
    axiom = lsystem_params.get('axiom', 'F')
    path = lsystem(
        iterations,
        axiom,
        rules,
        lsystem_params.get('angle', 60),
        lsystem_params.get('step', 1),
        stream=stream,
    )
    logging.info(
        f"L-system string | Entropy: {text_entropy(path.symbols):.4f} bits, "
        f"hash: {hash_str(path.symbols)}"
    )

    # --- Palette ---
    palette = build_palette(stream, palette_params.get('size', 5))
    logging.info(f"Palette: {', '.join(palette)}")

    return {
        'noise': noise,
        'flow_field': field,
        'particle_frames': frames,
        'automaton': automaton,
        'lsystem': path,
        'palette': palette,
    }


def main(config_path: Optional[str] = None):
    """
    The main function to run a generation session.
    """
    config_path = config_path or (sys.argv[1] if len(sys.argv) > 1 else 'config.json')

    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except Exception as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Generation Session Starting ---")

    profile = config.get('run_control', {}).get('profile', False)
    profiler = cProfile.Profile()

    if profile:
        profiler.enable()
    outputs = run_session(config)
    if profile:
        profiler.disable()

    frame_count = len(outputs['particle_frames'])
    if frame_count:
        last = outputs['particle_frames'][-1]
        logging.info(
            f"Particle frames: {frame_count} | Final mean position: "
            f"{np.round(last.positions.mean(axis=0), 2).tolist()}"
        )

    if profile:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Generation Session Finished ---")


if __name__ == "__main__":
    main()
