"""Export and re-load of a single simulation snapshot."""

import numpy as np
import json
from typing import Tuple, Dict, Any, Optional
from pathlib import Path
from nbody_sim.errors import InvalidArgumentError


def save_state(
    positions: np.ndarray,
    velocities: np.ndarray,
    masses: np.ndarray,
    output_path: str,
    metadata: Optional[Dict[str, Any]] = None
):
    """Save a simulation snapshot to file.

    Args:
        positions: Body positions (n, 2)
        velocities: Body velocities (n, 2)
        masses: Body masses (n,)
        output_path: Output file path (.npz or .json)
        metadata: Optional metadata dictionary of scalars
    """
    output_path = Path(output_path)
    positions = np.asarray(positions, dtype=float).reshape(-1, 2)
    velocities = np.asarray(velocities, dtype=float).reshape(-1, 2)
    masses = np.asarray(masses, dtype=float).flatten()

    if output_path.suffix == '.npz':
        save_dict = {
            'positions': positions,
            'velocities': velocities,
            'masses': masses
        }
        if metadata:
            for key, value in metadata.items():
                if isinstance(value, (int, float, str)):
                    save_dict[f'metadata_{key}'] = value
        np.savez_compressed(output_path, **save_dict)

    elif output_path.suffix == '.json':
        state_dict = {
            'positions': positions.tolist(),
            'velocities': velocities.tolist(),
            'masses': masses.tolist(),
            'metadata': metadata or {}
        }
        with open(output_path, 'w') as f:
            json.dump(state_dict, f, indent=2)

    else:
        raise InvalidArgumentError(f"Unsupported file format: {output_path.suffix}. Use .npz or .json")


def load_state(input_path: str) -> Tuple[np.ndarray, np.ndarray, np.ndarray, Dict[str, Any]]:
    """Load a simulation snapshot from file.

    Args:
        input_path: Input file path

    Returns:
        Tuple of (positions, velocities, masses, metadata)
    """
    input_path = Path(input_path)

    if input_path.suffix == '.npz':
        with np.load(input_path) as data:
            positions = data['positions']
            velocities = data['velocities']
            masses = data['masses']
            metadata = {
                key[len('metadata_'):]: data[key].item()
                for key in data.keys()
                if key.startswith('metadata_')
            }

    elif input_path.suffix == '.json':
        with open(input_path, 'r') as f:
            state_dict = json.load(f)
        positions = np.array(state_dict['positions'], dtype=float).reshape(-1, 2)
        velocities = np.array(state_dict['velocities'], dtype=float).reshape(-1, 2)
        masses = np.array(state_dict['masses'], dtype=float)
        metadata = state_dict.get('metadata', {})

    else:
        raise InvalidArgumentError(f"Unsupported file format: {input_path.suffix}. Use .npz or .json")

    return positions, velocities, masses, metadata
