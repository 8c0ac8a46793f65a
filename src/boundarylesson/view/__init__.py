"""
The VIEW layer: the Qt window, the keyboard input and the texts it shows.
It only reads `LessonSnapshot`s and forwards keyboard state to the controller.
"""
