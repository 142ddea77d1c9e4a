import autograd.numpy as np  # type: ignore

# Beyond this magnitude the saturating functions return their limit exactly.
SATURATION_THRESHOLD = 10.0

def sigmoid_activation(z):
    z_clipped = np.clip(z, -SATURATION_THRESHOLD, SATURATION_THRESHOLD)   # keeps exp well-behaved
    s = 1.0 / (1.0 + np.exp(-z_clipped))
    return np.where(z > SATURATION_THRESHOLD, 1.0, np.where(z < -SATURATION_THRESHOLD, 0.0, s))

def tanh_activation(z):
    t = np.tanh(z)
    return np.where(z > SATURATION_THRESHOLD, 1.0, np.where(z < -SATURATION_THRESHOLD, -1.0, t))

def softsign_activation(z):
    return z / (1.0 + np.abs(z))

def identity_activation(z):
    return z

activations = {
    "sigmoid"  : sigmoid_activation,
    "tanh"     : tanh_activation,
    "softsign" : softsign_activation,
    "identity" : identity_activation
    }

def get_activation(name: str):
    """
    Look up an activation function by name.

    The special name "none" returns None, meaning a layer
    outputs its raw weighted sums.
    """
    if name is None or name.lower() == "none":
        return None
    try:
        return activations[name]
    except KeyError:
        raise ValueError(f"Unknown activation function '{name}'. "
                         f"Use one of: {', '.join(activations)}, none") from None
