from .animator import PhysicsAnimator
