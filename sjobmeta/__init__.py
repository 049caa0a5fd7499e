"""Print batch scripts, environments and submit lines of SLURM jobs from sacct."""
